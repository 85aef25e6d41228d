"""This is the model system we use for the objects of the Inbox web service.

Here is what we need from it
----------------------------

1) Models should be plain Python objects, nice to use from application code,
   with attribute names that read well (`message_ids` rather than `messages`).

2) We need to take the JSON the web service sends, and apply it to those
   objects - both to create new models, and to refresh existing ones in place,
   so that references held elsewhere stay valid.

3) We need to turn a model back into the JSON the web service expects, for
   outgoing requests.

In addition:

4) The web service is not strict about its types. Timestamps arrive as epoch
   seconds, sometimes as strings; counters might be strings. We follow the
   robustness principle (https://en.wikipedia.org/wiki/Robustness_principle):
   incoming values are coerced, and bad values become empty ones. Nothing in
   here raises on bad data.

5) Some attributes are constants which identify the resource type (the
   `object` key). They are always set, and always sent.


How it works
------------

Every model class declares a resource mapping, once:

    @resource_mapping({
        'subject': 'subject',
        'unread': 'bool:unread',
        'message_ids': 'array:messages',
        'resource_type': 'const:object:thread',
    })
    class Thread(ModelObject):
        pass

See `mapping` for the declaration syntax, and `casters` for the types. The
mapping of the parent class (by default `ModelObject`, which maps `id`,
`namespace_id`, `created_at` and `updated_at`) is inherited.

`ModelObject.update()` then applies JSON to a model, and `ModelObject.raw()`
(or `to_json()`) goes the other way.

We considered `marshmallow` schemas for this, which we use elsewhere, but
a marshmallow load always creates a new object (or dict), fails on bad values,
and has no notion of constant fields. We do use its fields to parse dates.
"""


from .casters import CASTERS, Caster, Missing
from .mapping import FieldDescriptor, ResourceMapping, define_resource_mapping, resource_mapping
from .base import ModelObject, UNSYNCED_ID
from .namespace import Namespace
