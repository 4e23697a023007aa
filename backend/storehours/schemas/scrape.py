from pydantic import BaseModel


class Retailer(BaseModel):
    slug: str
    name: str


class ScrapeTriggered(BaseModel):
    message: str
    retailers: list[str]


class CacheCleared(BaseModel):
    message: str
    keys: list[str]
