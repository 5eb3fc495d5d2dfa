"""Async request lifecycle shared by every state container"""

import copy
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional, TYPE_CHECKING

from cocktail_api.exceptions import CocktailClientError

if TYPE_CHECKING:
    from state.store import Store

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Something went wrong"


class AsyncStatus(str, Enum):
    """Status of an async request"""
    IDLE = "idle"
    LOADING = "loading"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class FetchState:
    """Data plus status of one async fetch"""
    data: Any = None
    status: AsyncStatus = AsyncStatus.IDLE
    error: Optional[str] = None
    request_id: Optional[int] = None

    def is_current(self, request_id: Optional[int]) -> bool:
        """Check whether a completion belongs to the latest request"""
        return request_id is None or request_id == self.request_id

    def start(self, request_id: Optional[int] = None):
        self.status = AsyncStatus.LOADING
        self.error = None
        self.request_id = request_id

    def succeed(self, payload: Any, request_id: Optional[int] = None) -> bool:
        """Store the payload as-is; stale completions are dropped"""
        if not self.is_current(request_id):
            logger.debug(f"Dropping stale completion for request {request_id}")
            return False
        self.status = AsyncStatus.SUCCEEDED
        self.data = payload
        self.error = None
        return True

    def fail(self, message: Optional[str], request_id: Optional[int] = None) -> bool:
        if not self.is_current(request_id):
            logger.debug(f"Dropping stale failure for request {request_id}")
            return False
        self.status = AsyncStatus.FAILED
        self.error = message or DEFAULT_ERROR_MESSAGE
        return True

    def reset(self, empty: Any = None):
        self.data = copy.copy(empty)
        self.status = AsyncStatus.IDLE
        self.error = None
        self.request_id = None

    @property
    def is_loading(self) -> bool:
        return self.status == AsyncStatus.LOADING


@dataclass(frozen=True)
class Action:
    """A state transition request"""
    type: str
    payload: Any = None
    error: Optional[str] = None
    meta: Dict[str, Any] = field(default_factory=dict)

    @property
    def request_id(self) -> Optional[int]:
        return self.meta.get("request_id")

    @property
    def arg(self) -> Any:
        return self.meta.get("arg")


class ActionCreator:
    """Builds actions of a single type"""

    def __init__(self, type: str):
        self.type = type

    def __call__(self, payload: Any = None, **meta) -> Action:
        return Action(self.type, payload=payload, meta=meta)

    def __repr__(self):
        return f"ActionCreator({self.type!r})"


PayloadCreator = Callable[[Any, "Store"], Awaitable[Any]]


class AsyncAction:
    """
    An action that performs one request and reports how it ended

    Running it dispatches ``<prefix>/pending`` right away, awaits the payload
    creator, then dispatches ``<prefix>/fulfilled`` with the payload as-is or
    ``<prefix>/rejected`` with a readable error message.
    """

    def __init__(self, type_prefix: str, payload_creator: PayloadCreator):
        self.type_prefix = type_prefix
        self.payload_creator = payload_creator
        self.pending = f"{type_prefix}/pending"
        self.fulfilled = f"{type_prefix}/fulfilled"
        self.rejected = f"{type_prefix}/rejected"

    def pending_action(self, arg: Any = None, request_id: Optional[int] = None) -> Action:
        return Action(self.pending, meta={"arg": arg, "request_id": request_id})

    def fulfilled_action(self, payload: Any, arg: Any = None, request_id: Optional[int] = None) -> Action:
        return Action(self.fulfilled, payload=payload, meta={"arg": arg, "request_id": request_id})

    def rejected_action(self, error: Optional[str], arg: Any = None, request_id: Optional[int] = None) -> Action:
        return Action(
            self.rejected,
            error=error or DEFAULT_ERROR_MESSAGE,
            meta={"arg": arg, "request_id": request_id},
        )

    async def run(self, store: "Store", arg: Any = None) -> Action:
        """
        Execute the request and dispatch its lifecycle actions

        Args:
            store: Store to dispatch into; its API client serves the request
            arg: Argument handed to the payload creator

        Returns:
            The fulfilled or rejected action that was dispatched
        """
        request_id = store.next_request_id()
        store.dispatch(self.pending_action(arg, request_id))
        logger.debug(f"{self.type_prefix} started (request {request_id})")

        try:
            payload = await self.payload_creator(arg, store)
        except CocktailClientError as e:
            logger.error(f"{self.type_prefix} failed: {e}")
            action = self.rejected_action(str(e), arg, request_id)
        else:
            action = self.fulfilled_action(payload, arg, request_id)

        store.dispatch(action)
        return action

    def __repr__(self):
        return f"AsyncAction({self.type_prefix!r})"


def handles(*action_types: str):
    """Mark a slice method as the reducer for the given action types"""
    def decorator(func):
        func._handles = getattr(func, "_handles", ()) + tuple(action_types)
        return func
    return decorator


class Slice:
    """
    State container for one domain

    Subclasses define ``name`` and ``initial_state()``. Async actions listed in
    ``tracks`` get the standard pending/fulfilled/rejected transitions on the
    named FetchState attribute (``None`` for the slice state itself). Other
    reducers are methods decorated with ``@handles(...)`` and mutate the slice
    state in place.
    """

    name: str = ""
    tracks: Dict[AsyncAction, Optional[str]] = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        handlers: Dict[str, str] = {}
        for klass in reversed(cls.__mro__):
            for attr, value in vars(klass).items():
                for action_type in getattr(value, "_handles", ()):
                    handlers[action_type] = attr
        cls._handlers = handlers

        tracked: Dict[str, tuple] = {}
        for async_action, attr in cls.tracks.items():
            tracked[async_action.pending] = ("start", attr)
            tracked[async_action.fulfilled] = ("succeed", attr)
            tracked[async_action.rejected] = ("fail", attr)
        cls._tracked = tracked

    def initial_state(self) -> Any:
        raise NotImplementedError

    def handled_types(self):
        return set(self._handlers) | set(self._tracked)

    def _apply_lifecycle(self, state: Any, action: Action):
        transition, attr = self._tracked[action.type]
        fetch_state = state if attr is None else getattr(state, attr)
        if transition == "start":
            fetch_state.start(action.request_id)
        elif transition == "succeed":
            fetch_state.succeed(action.payload, action.request_id)
        else:
            fetch_state.fail(action.error, action.request_id)

    def reduce(self, state: Any, action: Action) -> bool:
        """
        Apply an action to this slice's state

        Returns:
            True if the slice handles the action type
        """
        handled = False
        if action.type in self._tracked:
            self._apply_lifecycle(state, action)
            handled = True

        attr = self._handlers.get(action.type)
        if attr is not None:
            getattr(self, attr)(state, action)
            handled = True
        return handled
