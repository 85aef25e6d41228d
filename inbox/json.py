from datetime import datetime
from json import JSONEncoder

from inbox.models.casters import cast_from_date


class InboxJSONEncoder(JSONEncoder):

    def default(self, obj):
        # Model objects, e.g. inside an `array` attribute.
        if hasattr(type(obj), 'resource_mapping') and callable(getattr(obj, 'raw', None)):
            return obj.raw()
        if isinstance(obj, datetime):
            return cast_from_date(obj)
        return JSONEncoder.default(self, obj)
