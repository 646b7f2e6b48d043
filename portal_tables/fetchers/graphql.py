"""
GraphQL page fetcher.

Runs a paginated list query against a graphene schema. The query receives
``first``, ``offset``, ``sortDirection`` and ``orderBy`` plus any filter
variables, and must select ``items`` and ``pageInfo { totalCount }`` on the
result field.

GraphQL errors and exceptions raised while executing the query are both
reported through ``on_error`` and leave the table showing its previous
rows; the controller itself never sees them.
"""

import asyncio
import logging
from typing import Any, Callable, Dict, Optional, Sequence

import graphene

from ..controller.fetch import FetchRequest
from ..core.exceptions import TableConfigurationError

logger = logging.getLogger(__name__)

ErrorHandler = Callable[[Sequence[Any]], None]


class GraphQLPageFetcher:
    """
    Fetch collaborator backed by ``graphene.Schema.execute``.

    Args:
        schema: A ``graphene.Schema``.
        query: The list query document.
        result_field: Name of the root field holding ``items``/``pageInfo``.
        controller: The controller to push pages into; may be bound later.
        variables: Filter variables sent with every request.
        context: Value passed as the GraphQL context (usually the request).
        on_error: Notification hook called with the GraphQL errors.
        operation_name: Operation to run when ``query`` holds several.

    Raises:
        TableConfigurationError: ``schema`` is not a ``graphene.Schema``.
    """

    def __init__(
        self,
        schema: graphene.Schema,
        query: str,
        result_field: str,
        *,
        controller=None,
        variables: Optional[Dict[str, Any]] = None,
        context: Any = None,
        on_error: Optional[ErrorHandler] = None,
        operation_name: Optional[str] = None,
    ):
        if not isinstance(schema, graphene.Schema):
            raise TableConfigurationError(
                f"{type(self).__name__} needs a graphene.Schema, got {type(schema).__name__}"
            )
        self.schema = schema
        self.query = query
        self.result_field = result_field
        self.controller = controller
        self.variables: Dict[str, Any] = dict(variables or {})
        self.context = context
        self.on_error = on_error
        self.operation_name = operation_name

    def bind(self, controller) -> "GraphQLPageFetcher":
        self.controller = controller
        return self

    def _require_controller(self):
        if self.controller is None:
            raise RuntimeError(f"{type(self).__name__} is not bound to a table controller")
        return self.controller

    def build_variables(self, request: FetchRequest) -> Dict[str, Any]:
        variables = {key: value for key, value in self.variables.items() if value is not None}
        variables.update(request.to_variables())
        return variables

    def _execute_kwargs(self, request: FetchRequest) -> Dict[str, Any]:
        return {
            "variable_values": self.build_variables(request),
            "context_value": self.context,
            "operation_name": self.operation_name,
        }

    def __call__(self, request: FetchRequest, force: bool = False) -> None:
        controller = self._require_controller()
        controller.set_loading(True)
        try:
            result = self.schema.execute(self.query, **self._execute_kwargs(request))
        except Exception as exc:
            logger.exception(f"GraphQL request for '{self.result_field}' failed")
            self._report([exc])
        else:
            self._handle_result(result)
        finally:
            controller.set_loading(False)

    def _handle_result(self, result) -> bool:
        if result.errors:
            self._report(result.errors)
            return False

        payload = (result.data or {}).get(self.result_field)
        if not isinstance(payload, dict):
            logger.error(f"GraphQL result has no '{self.result_field}' object")
            self._report([f"Missing result field '{self.result_field}'"])
            return False

        items = payload.get("items") or []
        page_info = payload.get("pageInfo") or {}
        total = page_info.get("totalCount")
        if total is None:
            total = len(items)
        self.controller.receive(data=items, total=total)
        return True

    def _report(self, errors: Sequence[Any]) -> None:
        for error in errors:
            logger.error(f"Unable to retrieve '{self.result_field}' page: {error}")
        if self.on_error is not None:
            self.on_error(list(errors))

    def set_filters(self, **filters: Any) -> None:
        """Update filter variables and reload from the first page."""
        self.variables.update(filters)
        self._require_controller().handle.set_page(0, force_refetch=True)


class AsyncGraphQLPageFetcher(GraphQLPageFetcher):
    """
    Variant scheduling ``schema.execute_async`` on the running event loop.

    Responses to superseded requests are dropped: only the result of the
    most recently issued request reaches the controller.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.latest_request: Optional[FetchRequest] = None
        self._latest_token = 0
        self.tasks: set = set()

    def __call__(self, request: FetchRequest, force: bool = False) -> None:
        self._require_controller()
        task = asyncio.get_running_loop().create_task(self.fetch(request))
        self.tasks.add(task)
        task.add_done_callback(self.tasks.discard)

    async def fetch(self, request: FetchRequest) -> bool:
        controller = self._require_controller()
        self._latest_token += 1
        token = self._latest_token
        self.latest_request = request
        controller.set_loading(True)
        error = None
        try:
            result = await self.schema.execute_async(self.query, **self._execute_kwargs(request))
        except Exception as exc:
            error = exc

        if token != self._latest_token:
            logger.debug(f"Dropping stale response for {request!r}")
            return False
        try:
            if error is not None:
                logger.error(f"GraphQL request for '{self.result_field}' failed", exc_info=error)
                self._report([error])
                return False
            return self._handle_result(result)
        finally:
            controller.set_loading(False)

    async def wait(self) -> None:
        """Wait for every scheduled fetch to finish."""
        while self.tasks:
            await asyncio.gather(*list(self.tasks))
