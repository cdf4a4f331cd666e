from pydantic import BaseModel, field_validator
from datetime import date
from typing import Optional


class DailyEntryBase(BaseModel):
    date: date
    mortality: int = 0
    feed_consumed_in_kg: float = 0
    average_weight_in_grams: float = 0
    notes: Optional[str] = None

    @field_validator('mortality')
    @classmethod
    def validate_mortality(cls, v):
        if v < 0:
            raise ValueError('Mortality cannot be negative.')
        return v

    @field_validator('feed_consumed_in_kg')
    @classmethod
    def validate_feed(cls, v):
        if v < 0:
            raise ValueError('Feed consumed cannot be negative.')
        return v

    @field_validator('average_weight_in_grams')
    @classmethod
    def validate_weight(cls, v):
        if v < 0:
            raise ValueError('Average weight cannot be negative.')
        return v


class DailyEntryCreate(DailyEntryBase):
    pass


class DailyEntry(DailyEntryBase):
    id: int
    batch_id: int
    tenant_id: Optional[str] = None

    class Config:
        from_attributes = True
