"""Dispatcher subpackage — imports trigger @register_dispatcher decorators."""

from finishem_sync.dispatchers.graphql import GraphQLDispatcher  # noqa: F401
from finishem_sync.dispatchers.json_outbox import JSONOutboxDispatcher  # noqa: F401
