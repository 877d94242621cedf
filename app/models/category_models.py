"""
Pydantic models for categories
"""
from pydantic import BaseModel, field_validator
from typing import Optional


class CategoryPayload(BaseModel):
    """Body for creating or overwriting a category"""
    name: Optional[str] = None
    description: Optional[str] = None

    @field_validator('name')
    @classmethod
    def name_cleanup(cls, v: Optional[str]) -> Optional[str]:
        """Blank names count as missing"""
        if v is not None and not v.strip():
            return None
        return v.strip() if v else v
