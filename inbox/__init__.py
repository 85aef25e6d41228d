from .models import ModelObject, Namespace, define_resource_mapping, resource_mapping, Missing
from .api import InboxAPI
from .errors import InboxError, InboxAPIError, InboxTransportError
