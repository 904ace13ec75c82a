# dental_api/crud/post.py

from __future__ import annotations
from typing import Optional, Sequence

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession

from dental_api.crud.base import PageResult, ilike_any, paginate
from dental_api.db.models.post import Post, PostComment


async def list_posts(
    db: AsyncSession, *, page: int = 1, limit: int = 10, search: str = ""
) -> PageResult[Post]:
    stmt = sa.select(Post)
    if search:
        stmt = stmt.where(ilike_any(search, Post.title, Post.content, Post.author))
    stmt = stmt.order_by(Post.created_at.desc(), Post.id.desc())
    return await paginate(db, stmt, page=page, limit=limit)


async def list_posts_by_owner(db: AsyncSession, user_id: int) -> Sequence[Post]:
    stmt = sa.select(Post).where(Post.user_id == user_id).order_by(Post.created_at.desc())
    res = await db.execute(stmt)
    return res.scalars().all()


async def get_post(db: AsyncSession, post_id: int) -> Optional[Post]:
    return await db.get(Post, post_id)


async def create_post(
    db: AsyncSession,
    *,
    author: str,
    password_hash: Optional[str],
    title: str,
    content: str,
    image_data: Optional[str] = None,
    user_id: Optional[int] = None,
) -> Post:
    obj = Post(
        author=author,
        password=password_hash,
        title=title,
        content=content,
        image_data=image_data,
        user_id=user_id,
    )
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    return obj


async def update_post(db: AsyncSession, post_id: int, *, title: str, content: str) -> Optional[Post]:
    obj = await db.get(Post, post_id)
    if not obj:
        return None
    obj.title = title
    obj.content = content
    await db.commit()
    await db.refresh(obj)
    return obj


async def delete_post(db: AsyncSession, post_id: int) -> bool:
    obj = await db.get(Post, post_id)
    if not obj:
        return False
    await db.delete(obj)
    await db.commit()
    return True


# --- comments ---

async def list_comments(db: AsyncSession, post_id: int) -> Sequence[PostComment]:
    stmt = (
        sa.select(PostComment)
        .where(PostComment.post_id == post_id)
        .order_by(PostComment.created_at.asc(), PostComment.id.asc())
    )
    res = await db.execute(stmt)
    return res.scalars().all()


async def get_comment(db: AsyncSession, comment_id: int) -> Optional[PostComment]:
    return await db.get(PostComment, comment_id)


async def create_comment(
    db: AsyncSession, post_id: int, *, author: str, password_hash: str, content: str
) -> PostComment:
    obj = PostComment(post_id=post_id, author=author, password=password_hash, content=content)
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    return obj


async def like_comment(db: AsyncSession, comment_id: int) -> Optional[int]:
    # single UPDATE so concurrent likes don't overwrite each other
    stmt = (
        sa.update(PostComment)
        .where(PostComment.id == comment_id)
        .values(likes=PostComment.likes + 1)
        .returning(PostComment.likes)
    )
    res = await db.execute(stmt)
    likes = res.scalar_one_or_none()
    await db.commit()
    return likes


async def add_comment_tag(db: AsyncSession, comment_id: int, tag: str) -> Optional[str]:
    """Append ``tag`` to the comment's comma-separated tags unless already present."""
    obj = await db.get(PostComment, comment_id)
    if not obj:
        return None
    tags = obj.tags.split(",") if obj.tags else []
    if tag not in tags:
        tags.append(tag)
    obj.tags = ",".join(tags)
    await db.commit()
    return obj.tags


async def delete_comment(db: AsyncSession, comment_id: int) -> bool:
    obj = await db.get(PostComment, comment_id)
    if not obj:
        return False
    await db.delete(obj)
    await db.commit()
    return True
