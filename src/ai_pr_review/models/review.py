from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, StringConstraints


RemarkBody = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class ChangedFile(BaseModel):
    """One file of a pull request, with its line-numbered diff."""
    model_config = ConfigDict(frozen=True)

    path: str
    diff: str
    content: str = ""


class RemarkDraft(BaseModel):
    """A remark as returned by the model, before the file path is attached."""
    position: PositiveInt
    body: RemarkBody


class ReviewResponse(BaseModel):
    summary: str
    remarks: list[RemarkDraft]


class Remark(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str
    position: PositiveInt
    body: RemarkBody


class Review(BaseModel):
    summary: str
    remarks: list[Remark] = Field(default_factory=list)
