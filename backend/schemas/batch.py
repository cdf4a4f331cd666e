from typing import Optional
from pydantic import BaseModel, field_validator
from datetime import date


class BatchBase(BaseModel):
    name: str
    start_date: date
    initial_bird_count: int

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError('Batch name is required.')
        return v.strip()

    @field_validator('initial_bird_count')
    @classmethod
    def validate_initial_bird_count(cls, v):
        if v < 1:
            raise ValueError('Bird count must be at least 1.')
        return v


class BatchCreate(BatchBase):
    pass


class BatchUpdate(BaseModel):
    name: Optional[str] = None
    start_date: Optional[date] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if v is not None and not v.strip():
            raise ValueError('Batch name is required.')
        return v.strip() if v else v


class Batch(BatchBase):
    id: int
    tenant_id: Optional[str] = None
    farmer_id: str

    class Config:
        from_attributes = True


class BatchSummary(BaseModel):
    batch_id: int
    name: str
    start_date: date
    initial_bird_count: int
    total_mortality: int
    birds_sold: int
    current_bird_count: int
    batch_age_days: int
    cycle_duration_days: int
    growth_cycle_progress: float
