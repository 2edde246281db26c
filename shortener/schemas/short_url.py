from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# longUrl故意設為Optional：缺少時由ShortUrlService回傳400 "No long URL provided"，
# 而不是讓FastAPI回傳422
class ShortUrlCreateRequest(BaseModel):
    long_url: str | None = Field(default=None, alias="longUrl")
    name: str | None = None


class UrlMappingResponse(BaseModel):
    id: int
    name: str | None
    long_url: str
    short_url: str
    created_at: datetime
    updated_at: datetime

    # from_attributes=True：可以直接用model_validate()把SQLAlchemy ORM物件轉成Pydantic模型
    # alias_generator=to_camel：JSON輸出的欄位名稱為camelCase (longUrl, shortUrl, createdAt...)
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )
