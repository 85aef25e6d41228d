class InboxError(Exception):
    pass


class InboxAPIError(InboxError):
    """
    The server answered, but with an error response. The Inbox API sends
    a JSON body of the form `{"type": "api_error", "message": "..."}`.
    """

    def __init__(self, message=None, *, status=None, type=None, body=None):
        super().__init__(message or f'API error (status {status})')
        self.message = message
        self.status = status
        self.type = type
        self.body = body

    @classmethod
    def from_response(cls, status, body):
        if isinstance(body, dict):
            return cls(
                body.get('message'),
                status=status,
                type=body.get('type'),
                body=body
            )
        return cls(body if isinstance(body, str) else None, status=status, body=body)

    def to_json(self):
        result = {
            'type': self.type,
            'status': self.status
        }
        if self.message:
            result['message'] = self.message
        return result


class InboxTransportError(InboxError):
    """
    The request did not complete - a network error, a timeout, or anything
    else the transport raised. The original exception is chained.
    """
