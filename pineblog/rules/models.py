from __future__ import annotations

from pydantic import BaseModel, Field, model_validator


class FilesRules(BaseModel):
    # Public base URL of the file store; rewritten to url_placeholder in posts
    base_url: str
    url_placeholder: str = "%URL%"
    storage_path: str = "./data/files"
    max_upload_bytes: int = Field(default=10_000_000, gt=0)

    @model_validator(mode="after")
    def _placeholder_outside_base(self) -> FilesRules:
        if not self.url_placeholder:
            raise ValueError("url_placeholder must not be empty")
        base = self.base_url.rstrip("/")
        if base and base in self.url_placeholder:
            raise ValueError("url_placeholder must not contain base_url")
        return self


class PostsRules(BaseModel):
    title_max: int = 160
    description_max: int = 450
    categories_max: int = 500
    cover_url_max: int = 254
    cover_caption_max: int = 160
    cover_link_max: int = 254


class BlogRules(BaseModel):
    title: str = "PineBlog"
    files: FilesRules
    posts: PostsRules = Field(default_factory=PostsRules)
