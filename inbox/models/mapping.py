"""
Resource mappings: per-class tables describing how model attributes map to
the keys of the JSON objects the web service sends and receives.

A mapping is declared as a dict, where the key is the client-side attribute
name, and the value is usually a compact string:

    ----------------+------------------------+----------+-----------------------------------
      attribute     |  declaration           |  type    |  meaning
    ----------------+------------------------+----------+-----------------------------------
      subject       |  'subject'             |  string  | json.subject -> model.subject
    ----------------+------------------------+----------+-----------------------------------
      message_ids   |  'array:messages'      |  array   | json.messages -> model.message_ids
    ----------------+------------------------+----------+-----------------------------------
      resource_type |  'const:object:draft'  |  const   | model.resource_type == 'draft',
                    |                        |          | json.object == 'draft'
    ----------------+------------------------+----------+-----------------------------------
      kind          |  'const:draft'         |  const   | model.kind == 'draft',
                    |                        |          | json.kind == 'draft'
    ----------------+------------------------+----------+-----------------------------------

That is: everything up to the first `:` names a caster (see `casters.CASTERS`),
the rest is the JSON key. For `const`, the rest is split again on `:` into the
JSON key and the value; without a second `:` it is only the value, and the
JSON key is the attribute name.

If the type is not a known caster, the whole string is taken as a JSON key of
type `string`. This is not an error.

A `FieldDescriptor` may be given instead of a string, which is the only way
to attach a `merge` function.
"""

import logging
from typing import Any, Callable, Dict, Iterator, Optional

import attr
from attr import NOTHING

from .casters import CASTERS


log = logging.getLogger(__name__)


@attr.s(frozen=True)
class FieldDescriptor:
    property_name: str = attr.ib()
    json_key: str = attr.ib()
    to: Callable = attr.ib()
    from_: Callable = attr.ib()
    merge: Optional[Callable] = attr.ib(default=None)
    type: str = attr.ib(default='string')
    is_constant: bool = attr.ib(default=False)
    constant: Any = attr.ib(default=None)


def parse_declaration(property_name: str, declaration: str) -> FieldDescriptor:
    """Compile a single compact string declaration into a `FieldDescriptor`."""
    type_ = 'string'
    json_key = declaration
    is_constant = False
    constant = None

    type_name, sep, rest = declaration.partition(':')
    if sep:
        if type_name in CASTERS:
            type_ = type_name
            json_key = rest
            if type_ == 'const':
                is_constant = True
                key, sep, value = rest.partition(':')
                if sep:
                    json_key, constant = key, value
                else:
                    json_key, constant = property_name, rest
        else:
            log.debug('Unknown cast type %r for %r, treating %r as a string key',
                      type_name, property_name, declaration)

    caster = CASTERS[type_]
    return FieldDescriptor(
        property_name=property_name,
        json_key=json_key,
        to=caster.to,
        from_=caster.from_,
        merge=caster.merge,
        type=type_,
        is_constant=is_constant,
        constant=constant,
    )


class ResourceMapping:
    """
    An ordered table of `FieldDescriptor`s, keyed by attribute name, with a
    reverse index from JSON key to attribute name in `json_keys`.
    """

    def __init__(self, descriptors=()):
        self.fields: Dict[str, FieldDescriptor] = {}
        self.json_keys: Dict[str, str] = {}
        for descriptor in descriptors:
            self.add(descriptor)

    def add(self, descriptor: FieldDescriptor):
        self.fields[descriptor.property_name] = descriptor
        self.json_keys[descriptor.json_key] = descriptor.property_name

    def copy(self) -> 'ResourceMapping':
        return ResourceMapping(self.fields.values())

    def extend(self, declarations: Dict[str, Any]) -> 'ResourceMapping':
        """Return a new mapping with the given declarations laid over a
        copy of this one. `self` is not modified.
        """
        mapping = self.copy()
        for property_name, declaration in declarations.items():
            if isinstance(declaration, str):
                descriptor = parse_declaration(property_name, declaration)
            elif isinstance(declaration, FieldDescriptor):
                descriptor = attr.evolve(declaration, property_name=property_name)
            else:
                continue
            previous = mapping.fields.get(property_name)
            if previous is not None and mapping.json_keys.get(previous.json_key) == property_name:
                del mapping.json_keys[previous.json_key]
            mapping.add(descriptor)
        return mapping

    def property_for(self, json_key: str) -> Optional[str]:
        return self.json_keys.get(json_key)

    def __iter__(self) -> Iterator[FieldDescriptor]:
        return iter(list(self.fields.values()))

    def __len__(self):
        return len(self.fields)

    def __contains__(self, property_name):
        return property_name in self.fields

    def __getitem__(self, property_name) -> FieldDescriptor:
        return self.fields[property_name]

    def __repr__(self):
        return f'<ResourceMapping {list(self.fields)}>'


def define_resource_mapping(resource_class, mapping: Dict[str, Any], base=NOTHING):
    """Attach a `ResourceMapping` to `resource_class`.

    `base` is the class to inherit fields from. If not given, this is
    `ModelObject`; pass `None` to inherit nothing.
    """
    if base is NOTHING:
        from .base import ModelObject
        base = ModelObject

    if base is None:
        parent = ResourceMapping()
    else:
        parent = base.resource_mapping

    resource_class.resource_mapping = parent.extend(mapping)
    return resource_class


def resource_mapping(mapping: Dict[str, Any], base=NOTHING):
    """Class decorator form of `define_resource_mapping`:

        @resource_mapping({
            'subject': 'subject',
            'unread': 'bool:unread',
        })
        class Message(ModelObject):
            ...
    """
    def wrap(cls):
        return define_resource_mapping(cls, mapping, base)
    return wrap
