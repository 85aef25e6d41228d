"""
The client context every model holds on to. It knows the base URL of the
web service, how to send requests, and where to put models once loaded.

The actual HTTP transport is not part of this library. Pass an async callable
with the signature `transport(method, url) -> (status, body)`, where `body`
is either the decoded JSON of the response, or its raw `str`/`bytes` text,
which is then decoded here.
"""
import json
import logging
import os

import dotenv

from inbox.errors import InboxError, InboxAPIError, InboxTransportError
from inbox.models import Namespace


log = logging.getLogger(__name__)


DEFAULT_BASE_URL = 'https://api.inboxapp.com'


class InboxAPI:

    def __init__(self, base_url, transport, *, cache=None):
        self._base_url = base_url.rstrip('/')
        self.transport = transport
        self.cache = cache

    @classmethod
    def from_env(cls, transport, **kwargs):
        """Reads `INBOX_BASE_URL`, from the environment or a `.env` file."""
        dotenv.load_dotenv()
        return cls(os.environ.get('INBOX_BASE_URL', DEFAULT_BASE_URL), transport, **kwargs)

    def base_url(self):
        return self._base_url

    def get_namespace(self, namespace_id):
        return Namespace(self, namespace_id)

    def persist_model(self, model):
        # No cache configured, nothing to do.
        if self.cache is not None:
            self.cache.persist(model)

    async def request(self, method, url, on_success):
        """
        Send a request, and pass the decoded response body to `on_success`,
        returning its result.
        """
        log.debug('%s %s', method.upper(), url)
        try:
            status, body = await self.transport(method, url)
        except InboxError:
            raise
        except Exception as exc:
            raise InboxTransportError(f'{method.upper()} {url} failed: {exc}') from exc

        if isinstance(body, (str, bytes)) and body:
            try:
                body = json.loads(body)
            except ValueError as exc:
                if status < 400:
                    raise InboxTransportError(f'{method.upper()} {url}: invalid JSON') from exc

        if status >= 400:
            error = InboxAPIError.from_response(status, body)
            log.warning('%s %s returned %s: %s', method.upper(), url, status, error.message)
            raise error

        return on_success(body)
