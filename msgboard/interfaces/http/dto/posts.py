from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from msgboard.domain.posts.entities import Post


class CreatePostRequestDTO(BaseModel):
    # ``message`` is the field name used by the file-backed board's form.
    content: str = Field("", validation_alias=AliasChoices("content", "message"))

    model_config = ConfigDict(extra="ignore")


class ListPostsQueryDTO(BaseModel):
    limit: int | None = Field(None, ge=1)


class PostDTO(BaseModel):
    author: str
    content: str
    created_at: datetime = Field(serialization_alias="createdAt")

    @classmethod
    def from_domain(cls, post: Post) -> PostDTO:
        return cls(author=post.author, content=post.content, created_at=post.created_at)


class PostCreatedDTO(BaseModel):
    success: bool = True
