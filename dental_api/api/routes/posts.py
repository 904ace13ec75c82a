# dental_api/api/routes/posts.py
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from dental_api.core.config import Settings
from dental_api.core.errors import ClinicError, ErrorKind, not_found
from dental_api.core.security import (
    CurrentUser,
    get_app_settings,
    hash_password_async,
    optional_user,
    verify_password_async,
)
from dental_api.crud.post import (
    add_comment_tag,
    create_comment,
    create_post,
    delete_comment,
    delete_post,
    get_comment,
    get_post,
    like_comment,
    list_comments,
    list_posts,
    update_post,
)
from dental_api.db.session import get_session
from dental_api.schemas.base import Page, PasswordBody, VerifyResult
from dental_api.schemas.post import (
    CommentCreate,
    CommentOut,
    LikesOut,
    PostDetail,
    PostOut,
    PostSummary,
    PostUpdate,
    TagIn,
    TagsOut,
)
from dental_api.services.ownership import resolve_ownership
from dental_api.services.uploads import read_image

router = APIRouter(prefix="/api/posts", tags=["posts"])


@router.get("", response_model=Page[PostSummary])
async def list_posts_ep(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: str = "",
    db: AsyncSession = Depends(get_session),
):
    return Page[PostSummary].from_result(await list_posts(db, page=page, limit=limit, search=search))


@router.post("", response_model=PostOut, status_code=status.HTTP_201_CREATED)
async def create_post_ep(
    title: str = Form(..., min_length=1, max_length=255),
    content: str = Form(..., min_length=1),
    author: Optional[str] = Form(None),
    password: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    user: Optional[CurrentUser] = Depends(optional_user),
    db: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
):
    if user is None:
        # anonymous posts can only ever be changed with their password
        if not author or not author.strip():
            raise ClinicError(ErrorKind.INVALID_ARGUMENT, "Author is required")
        if not password:
            raise ClinicError(ErrorKind.MISSING_CREDENTIAL)

    image_data = await read_image(image, settings.MAX_UPLOAD_BYTES)
    return await create_post(
        db,
        author=user.username if user else author.strip(),
        password_hash=await hash_password_async(password) if password else None,
        title=title,
        content=content,
        image_data=image_data,
        user_id=user.id if user else None,
    )


# --- comments (declared before /{post_id} routes) ---

@router.post("/comments/{comment_id}/like", response_model=LikesOut)
async def like_comment_ep(comment_id: int, db: AsyncSession = Depends(get_session)):
    likes = await like_comment(db, comment_id)
    if likes is None:
        raise not_found("Comment")
    return LikesOut(likes=likes)


@router.post("/comments/{comment_id}/tags", response_model=TagsOut)
async def tag_comment_ep(comment_id: int, payload: TagIn, db: AsyncSession = Depends(get_session)):
    tag = (payload.tag or "").strip()
    if not tag:
        raise ClinicError(ErrorKind.INVALID_ARGUMENT, "Tag is empty")
    tags = await add_comment_tag(db, comment_id, tag)
    if tags is None:
        raise not_found("Comment")
    return TagsOut(tags=tags)


@router.delete("/comments/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment_ep(
    comment_id: int,
    payload: Optional[PasswordBody] = None,
    db: AsyncSession = Depends(get_session),
):
    comment = await get_comment(db, comment_id)
    if not comment:
        raise not_found("Comment")
    # comments carry no owner column; only the password path applies
    decision = await resolve_ownership(
        owner_user_id=None,
        password_hash=comment.password,
        caller_user_id=None,
        submitted_password=payload.password if payload else None,
    )
    decision.raise_if_denied()
    await delete_comment(db, comment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# --- single post ---

@router.get("/{post_id}", response_model=PostDetail)
async def get_post_ep(post_id: int, db: AsyncSession = Depends(get_session)):
    post = await get_post(db, post_id)
    if not post:
        raise not_found("Post")
    comments = await list_comments(db, post_id)
    return PostDetail(
        **PostOut.model_validate(post).model_dump(),
        comments=[CommentOut.model_validate(c) for c in comments],
    )


@router.post("/{post_id}/verify", response_model=VerifyResult)
async def verify_post_password_ep(post_id: int, payload: PasswordBody, db: AsyncSession = Depends(get_session)):
    post = await get_post(db, post_id)
    if not post:
        raise not_found("Post")
    match = bool(payload.password) and await verify_password_async(payload.password, post.password)
    return VerifyResult(success=match)


@router.put("/{post_id}", response_model=PostOut)
async def update_post_ep(
    post_id: int,
    payload: PostUpdate,
    user: Optional[CurrentUser] = Depends(optional_user),
    db: AsyncSession = Depends(get_session),
):
    post = await get_post(db, post_id)
    if not post:
        raise not_found("Post")
    decision = await resolve_ownership(
        owner_user_id=post.user_id,
        password_hash=post.password,
        caller_user_id=user.id if user else None,
        submitted_password=payload.password,
    )
    decision.raise_if_denied()
    return await update_post(db, post_id, title=payload.title, content=payload.content)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post_ep(
    post_id: int,
    payload: Optional[PasswordBody] = None,
    user: Optional[CurrentUser] = Depends(optional_user),
    db: AsyncSession = Depends(get_session),
):
    post = await get_post(db, post_id)
    if not post:
        raise not_found("Post")
    decision = await resolve_ownership(
        owner_user_id=post.user_id,
        password_hash=post.password,
        caller_user_id=user.id if user else None,
        submitted_password=payload.password if payload else None,
    )
    decision.raise_if_denied()
    await delete_post(db, post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{post_id}/comments", response_model=CommentOut, status_code=status.HTTP_201_CREATED)
async def create_comment_ep(post_id: int, payload: CommentCreate, db: AsyncSession = Depends(get_session)):
    if not await get_post(db, post_id):
        raise not_found("Post")
    return await create_comment(
        db,
        post_id,
        author=payload.author,
        password_hash=await hash_password_async(payload.password),
        content=payload.content,
    )
