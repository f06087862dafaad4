"""
Assist Application DTOs
=======================
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ========== Request DTOs ==========

class CategorizeRequest(BaseModel):
    title: str = Field(..., min_length=1, description="Ticket title")
    description: str = Field(..., min_length=1, description="Ticket description")


class SuggestionsRequest(BaseModel):
    title: str = Field(..., min_length=1, description="Ticket title")
    description: str = Field(..., min_length=1, description="Ticket description")
    category: Optional[str] = Field(None, description="Known category, if any")


# ========== Response DTOs ==========

class CategorizeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    category: str
    priority: str
    confidence: float


class SuggestionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    title: str
    description: str
    confidence: float


class SuggestionsResponse(BaseModel):
    suggestions: List[SuggestionResponse]
