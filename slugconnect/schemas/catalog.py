from pydantic import BaseModel, Field


class CatalogResponse(BaseModel):
    majors: list[str] = Field(default_factory=list)
    years: list[str] = Field(default_factory=list)
    colleges: list[str] = Field(default_factory=list)
    popular_interests: list[str] = Field(default_factory=list)
    filter_interests: list[str] = Field(default_factory=list)
    max_interests: int = 10
