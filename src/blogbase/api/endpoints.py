from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..gateway import BackendGateway, format_date
from .registry import register_api
from .serializers import serialize_comment, serialize_post, serialize_session


@register_api(
    "login",
    description="Sign the blog owner in with email and password.",
    category="auth",
    tags=("write",),
)
async def login(gateway: BackendGateway, email: str, password: str) -> Dict[str, Any]:
    result = await gateway.login(email, password)
    return result.as_dict(serialize_session)


@register_api(
    "logout",
    description="Sign the current owner out.",
    category="auth",
    tags=("write",),
)
async def logout(gateway: BackendGateway) -> None:
    await gateway.logout()


@register_api(
    "get_session",
    description="Return the active session, or null when nobody is signed in.",
    category="auth",
    tags=("read",),
)
async def get_session(gateway: BackendGateway) -> Optional[Dict[str, Any]]:
    return serialize_session(await gateway.get_session())


@register_api(
    "is_logged_in",
    description="Report whether a session is active.",
    category="auth",
    tags=("read",),
)
async def is_logged_in(gateway: BackendGateway) -> bool:
    return await gateway.is_logged_in()


@register_api(
    "get_user_id",
    description="Return the signed-in user's identifier.",
    category="auth",
    tags=("read", "helper"),
)
async def get_user_id(gateway: BackendGateway) -> Optional[str]:
    return await gateway.get_user_id()


@register_api(
    "fetch_posts",
    description="List all posts, newest first.",
    category="posts",
    tags=("read",),
)
async def fetch_posts(gateway: BackendGateway) -> List[Dict[str, Any]]:
    posts = (await gateway.fetch_posts()).unwrap_or([])
    return [serialize_post(post) for post in posts]


@register_api(
    "fetch_post",
    description="Fetch a single post by id, or null when it does not exist.",
    category="posts",
    tags=("read",),
)
async def fetch_post(gateway: BackendGateway, post_id: int) -> Optional[Dict[str, Any]]:
    post = (await gateway.fetch_post(post_id)).value
    return serialize_post(post) if post else None


@register_api(
    "create_post",
    description="Create a post from title, content, cover_image and author_id.",
    category="posts",
    tags=("write",),
)
async def create_post(gateway: BackendGateway, post_data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    result = await gateway.create_post(post_data)
    return serialize_post(result.value) if result.ok and result.value else None


@register_api(
    "update_post",
    description="Update fields of a post and verify the stored values.",
    category="posts",
    tags=("write",),
)
async def update_post(gateway: BackendGateway, post_id: int, updates: Dict[str, Any]) -> bool:
    return (await gateway.update_post(post_id, updates)).ok


@register_api(
    "delete_post",
    description="Delete a post.",
    category="posts",
    tags=("write",),
)
async def delete_post(gateway: BackendGateway, post_id: int) -> bool:
    return (await gateway.delete_post(post_id)).ok


@register_api(
    "increment_likes",
    description="Atomically add one like to a post.",
    category="posts",
    tags=("write",),
)
async def increment_likes(gateway: BackendGateway, post_id: int) -> bool:
    return (await gateway.increment_likes(post_id)).ok


@register_api(
    "fetch_comments",
    description="List the comments of a post, oldest first.",
    category="comments",
    tags=("read",),
)
async def fetch_comments(gateway: BackendGateway, post_id: int) -> List[Dict[str, Any]]:
    comments = (await gateway.fetch_comments(post_id)).unwrap_or([])
    return [serialize_comment(comment) for comment in comments]


@register_api(
    "create_comment",
    description="Add a comment (post_id, name, comment) to a post.",
    category="comments",
    tags=("write",),
)
async def create_comment(gateway: BackendGateway, comment_data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    result = await gateway.create_comment(comment_data)
    return serialize_comment(result.value) if result.ok and result.value else None


@register_api(
    "format_date",
    description="Render an ISO timestamp as a locale date.",
    category="helpers",
    tags=("helper",),
)
def format_iso_date(gateway: BackendGateway, iso_string: str) -> str:
    return format_date(iso_string)
