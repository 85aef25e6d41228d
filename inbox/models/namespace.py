from .base import ModelObject
from .mapping import resource_mapping


@resource_mapping({
    'object': 'const:object:namespace',
    'namespace_id': 'namespace_id',
    'account_id': 'account_id',
    'email_address': 'email_address',
    'name': 'name',
    'provider': 'provider',
})
class Namespace(ModelObject):
    """
    A namespace groups the data of a single email account. Every other model
    belongs to one; its id is the namespace id.
    """

    def __init__(self, inbox, id=None, namespace_id=None):
        super().__init__(inbox, id, namespace_id or id)

    def update(self, data):
        super().update(data)
        # The id of a namespace is its namespace id.
        if not self.namespace_id and not self.is_unsynced():
            self.namespace_id = self.id

    def namespace(self):
        return self

    def resource_path(self):
        return self.namespace_url()
