from pydantic import BaseModel, Field, field_validator


class ExperienceRequest(BaseModel):
    query: str = Field(..., min_length=1, description="Free-text query to build an immersive experience around.")

    @field_validator("query")
    @classmethod
    def query_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("query must not be blank")
        return value


class ExperienceResponse(BaseModel):
    response: str
    query: str
    timestamp: str
    model: str
    note: str | None = None
    error: str | None = None


class ErrorResponse(BaseModel):
    error: str
