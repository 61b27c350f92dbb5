"""
Post, like and comment routes. All of them require a token.
"""
from fastapi import APIRouter, Depends, status
from devconnector.api.dependencies import get_current_user_id, get_post_service
from devconnector.api.schemas import ItemResponse, ListResponse, TextRequest
from devconnector.services.post_service import PostService

router = APIRouter(prefix="/posts", tags=["Posts"])


@router.post("", response_model=ItemResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    body: TextRequest,
    actor: str = Depends(get_current_user_id),
    post_service: PostService = Depends(get_post_service)
):
    post = await post_service.create_post(actor, body.text)
    return ItemResponse(success=True, data=post.to_json(), message="Post created")


@router.get("", response_model=ListResponse)
async def list_posts(
    actor: str = Depends(get_current_user_id),
    post_service: PostService = Depends(get_post_service)
):
    """All posts, newest first."""
    posts = await post_service.list_posts()
    return ListResponse(
        success=True,
        data=[post.to_json() for post in posts],
        total=len(posts),
        message=f"Retrieved {len(posts)} post(s)"
    )


@router.get("/{post_id}", response_model=ItemResponse)
async def get_post(
    post_id: str,
    actor: str = Depends(get_current_user_id),
    post_service: PostService = Depends(get_post_service)
):
    post = await post_service.get_post(post_id)
    return ItemResponse(success=True, data=post.to_json())


@router.delete("/{post_id}", response_model=ItemResponse)
async def delete_post(
    post_id: str,
    actor: str = Depends(get_current_user_id),
    post_service: PostService = Depends(get_post_service)
):
    """Delete a post. Only its author may do so."""
    await post_service.delete_post(actor, post_id)
    return ItemResponse(success=True, data=None, message="Post removed")


@router.put("/like/{post_id}", response_model=ListResponse)
async def like_post(
    post_id: str,
    actor: str = Depends(get_current_user_id),
    post_service: PostService = Depends(get_post_service)
):
    """Like a post. Returns the post's likes."""
    likes = await post_service.like_post(actor, post_id)
    return ListResponse(success=True, data=[like.to_json() for like in likes], total=len(likes))


@router.put("/unlike/{post_id}", response_model=ListResponse)
async def unlike_post(
    post_id: str,
    actor: str = Depends(get_current_user_id),
    post_service: PostService = Depends(get_post_service)
):
    """Withdraw a like. Returns the post's likes."""
    likes = await post_service.unlike_post(actor, post_id)
    return ListResponse(success=True, data=[like.to_json() for like in likes], total=len(likes))


@router.post("/comment/{post_id}", response_model=ListResponse, status_code=status.HTTP_201_CREATED)
async def add_comment(
    post_id: str,
    body: TextRequest,
    actor: str = Depends(get_current_user_id),
    post_service: PostService = Depends(get_post_service)
):
    """Comment on a post. Returns the post's comments, newest first."""
    comments = await post_service.add_comment(actor, post_id, body.text)
    return ListResponse(
        success=True,
        data=[comment.to_json() for comment in comments],
        total=len(comments)
    )


@router.delete("/comment/{post_id}/{comment_id}", response_model=ListResponse)
async def delete_comment(
    post_id: str,
    comment_id: str,
    actor: str = Depends(get_current_user_id),
    post_service: PostService = Depends(get_post_service)
):
    """Delete a comment. Only its author may do so."""
    comments = await post_service.delete_comment(actor, post_id, comment_id)
    return ListResponse(
        success=True,
        data=[comment.to_json() for comment in comments],
        total=len(comments)
    )
