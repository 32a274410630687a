# backend/schemas/common.py
from typing import Optional
from pydantic import BaseModel, Field

# Base for schemas exposed with camelCase wire names
class WireModel(BaseModel):
    class Config:
        populate_by_name = True
        from_attributes = True

# Outcome of a field-set on a single record
class UpdateResult(WireModel):
    acknowledged: bool = True
    matched_count: int = Field(0, alias="matchedCount")
    modified_count: int = Field(0, alias="modifiedCount")

class DeleteResult(WireModel):
    acknowledged: bool = True
    deleted_count: int = Field(0, alias="deletedCount")

class InsertResult(WireModel):
    acknowledged: bool = True
    inserted_id: Optional[str] = Field(None, alias="insertedId")
