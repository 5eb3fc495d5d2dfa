"""User session container"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from cocktail_api.exceptions import ClientValidationError
from state.lifecycle import ActionCreator, AsyncAction, FetchState, Slice, handles


async def _login_or_register(arg, store):
    arg = arg or {}
    firebase_uid = arg.get("firebase_uid")
    if not firebase_uid:
        raise ClientValidationError("Identity provider user ID is required")
    return await store.api.login_or_register(firebase_uid, arg.get("email"))


async def _update_avatar(avatar_id, store):
    if avatar_id is None:
        raise ClientValidationError("Avatar ID is required")
    response = await store.api.update_avatar(avatar_id)
    return (response or {}).get("user") or {"avatar_id": avatar_id}


login_or_register = AsyncAction("user/login_or_register", _login_or_register)
update_avatar = AsyncAction("user/update_avatar", _update_avatar)

set_user = ActionCreator("user/set_user")
login_as_guest = ActionCreator("user/login_as_guest")
clear_user = ActionCreator("user/clear_user")


@dataclass
class UserState:
    current_user: Optional[Dict[str, Any]] = None
    is_guest: bool = False
    # True until the identity provider reports its initial state
    is_auth_loading: bool = True
    login: FetchState = field(default_factory=lambda: FetchState(data=None))
    avatar: FetchState = field(default_factory=lambda: FetchState(data=None))


class UserSlice(Slice):
    """Signed-in user or guest session"""

    name = "user"
    tracks = {
        login_or_register: "login",
        update_avatar: "avatar",
    }

    def initial_state(self) -> UserState:
        return UserState()

    @handles(login_or_register.pending)
    def _login_pending(self, state, action):
        state.is_auth_loading = True

    @handles(login_or_register.fulfilled)
    def _login_fulfilled(self, state, action):
        if not state.login.is_current(action.request_id):
            return
        state.current_user = action.payload
        state.is_guest = False
        state.is_auth_loading = False

    @handles(login_or_register.rejected)
    def _login_rejected(self, state, action):
        if not state.login.is_current(action.request_id):
            return
        state.current_user = None
        state.is_auth_loading = False

    @handles(update_avatar.fulfilled)
    def _avatar_fulfilled(self, state, action):
        if not state.avatar.is_current(action.request_id):
            return
        if state.current_user is not None:
            state.current_user = {
                **state.current_user,
                "avatar_id": (action.payload or {}).get("avatar_id"),
            }

    @handles(set_user.type)
    def _set_user(self, state, action):
        state.current_user = action.payload
        state.is_guest = False

    @handles(login_as_guest.type)
    def _login_as_guest(self, state, action):
        state.is_guest = True
        state.current_user = None
        state.is_auth_loading = False

    @handles(clear_user.type)
    def _clear_user(self, state, action):
        state.current_user = None
        state.is_guest = False
        state.is_auth_loading = False
        state.login.reset(None)
        state.avatar.reset(None)
