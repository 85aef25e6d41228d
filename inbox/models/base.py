import json
import logging
from collections.abc import Mapping

from ..json import InboxJSONEncoder
from .casters import Missing
from .mapping import define_resource_mapping


log = logging.getLogger(__name__)


# Models created locally, which the server does not know about yet, get this
# as their id. Saving them replaces it with the id assigned by the server.
UNSYNCED_ID = '-selfdefined'


def is_object(value) -> bool:
    return not (value is None or value is Missing or isinstance(value, (str, bytes, int, float)))


def copy_container(value):
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, Mapping):
        return dict(value)
    return value


class ModelObject:
    """
    Base class for all models exposed by the Inbox API.

    Each subclass has a `resource_mapping` (see `define_resource_mapping`),
    which `update()` and `raw()` use to move data between the model's
    attributes and the JSON objects of the web service.

    Mapped attributes which have never been set read as `Missing`.
    """

    def __init__(self, inbox, id=None, namespace_id=None):
        self._inbox = inbox
        self._namespace = None
        self.id = id or UNSYNCED_ID

        if namespace_id:
            if isinstance(namespace_id, str):
                self.namespace_id = namespace_id
            else:
                namespace = self._coerce_namespace(namespace_id)
                self._namespace = namespace
                self.namespace_id = namespace.namespace_id

    def _coerce_namespace(self, value):
        if isinstance(value, Mapping):
            from .namespace import Namespace
            return Namespace.from_json(self._inbox, value)
        return value

    def __getattr__(self, name):
        # Only called if normal lookup fails.
        if not name.startswith('_') and name in type(self).resource_mapping:
            return Missing
        raise AttributeError(f'{type(self).__name__!r} object has no attribute {name!r}')

    def __repr__(self):
        return f'<{type(self).__name__} id={self.id!r}>'

    @classmethod
    def from_json(cls, inbox, data):
        """Create a model from a JSON object returned by the web service."""
        instance = cls(inbox)
        instance.update(data)
        return instance

    def inbox(self):
        return self._inbox

    def namespace(self):
        """
        Return the namespace this model belongs to, creating (and caching)
        one if necessary.

        Different models for the same namespace id may end up with different
        namespace instances, which do not share data. Use this mainly to
        fetch things from the server.
        """
        if self._namespace is not None:
            return self._namespace
        if self.namespace_id:
            self._namespace = self._inbox.get_namespace(self.namespace_id)
            return self._namespace
        return None

    def base_url(self):
        return self._inbox.base_url()

    def namespace_url(self):
        return f'{self._inbox.base_url()}/n/{self.namespace_id}'

    def resource_path(self):
        """
        The URL of this resource. For unsynced models, this should be the URL
        that creates the resource when pushed to.
        """
        return self.base_url()

    def is_unsynced(self):
        return isinstance(self.id, str) and self.id.endswith(UNSYNCED_ID)

    def has_property(self, name):
        return name in self.__dict__

    async def reload(self):
        """
        Fetch the model from the server and apply the result. Unsynced models
        are returned as they are, without a request.

        Raises `InboxAPIError` or `InboxTransportError`; the model is not
        touched in that case.
        """
        if self.is_unsynced():
            log.debug('Not reloading unsynced %r', self)
            return self

        def on_success(data):
            self.update(data)
            self._inbox.persist_model(self)
            return self

        return await self._inbox.request('get', self.resource_path(), on_success)

    def update(self, data):
        """
        Apply a JSON object from the web service to this model, converting
        keys and values per the resource mapping. Unknown keys are ignored.
        """
        mapping = self.resource_mapping
        if data is None:
            data = {}

        for info in mapping:
            name = info.property_name

            # Constants win, whatever the payload says.
            if info.is_constant:
                setattr(self, name, info.constant)
                continue

            if info.json_key not in data:
                continue
            value = data[info.json_key]
            if value is Missing:
                continue

            value = info.to(value, info)
            current = self.__dict__.get(name, Missing)
            if info.merge and is_object(value) and is_object(current):
                info.merge(current, value)
            else:
                setattr(self, name, value)

        unknown = [key for key in data if key not in mapping.json_keys]
        if unknown:
            log.debug('Ignoring unknown keys for %s: %s', type(self).__name__, unknown)

    def raw(self):
        """
        Convert the model into a JSON-ready dict, per the resource mapping.
        Attributes which were never set are left out; containers are copied.
        """
        out = {}
        for info in self.resource_mapping:
            if info.is_constant:
                out[info.json_key] = info.constant
                continue

            if not self.has_property(info.property_name):
                continue
            value = self.__dict__[info.property_name]
            if value is Missing:
                continue

            value = info.from_(value, info)
            if value is Missing:
                continue
            out[info.json_key] = copy_container(value)
        return out

    def to_json(self):
        return json.dumps(self.raw(), cls=InboxJSONEncoder)


define_resource_mapping(ModelObject, {
    'id': 'id',
    'namespace_id': 'namespace',
    'created_at': 'date:created_at',
    'updated_at': 'date:updated_at',
}, base=None)
