"""
Request schemas for the export endpoints.

These only check the outer shape of a request; the dashboard normalizer is
responsible for clamping, padding and defaulting the content itself.
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DashboardExportInput(BaseModel):
    """Schema for a dashboard export request. Unknown keys are passed through."""
    model_config = ConfigDict(extra='allow', populate_by_name=True)

    client_name: Optional[Any] = Field(None, alias='clientName')
    week_label: Optional[Any] = Field(None, alias='weekLabel')
    palette: Optional[Any] = None
    days: Optional[Any] = Field(default_factory=list)

    @field_validator('client_name', 'week_label')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        if isinstance(v, str):
            return v.strip()
        return v

    def to_record(self) -> Dict[str, Any]:
        """Plain dict in the camelCase shape the normalizer reads."""
        return self.model_dump(by_alias=True, exclude_none=True)


class CardSnapshotInput(BaseModel):
    """Schema for a single card snapshot export."""
    model_config = ConfigDict(populate_by_name=True)

    data_url: str = Field(..., alias='dataUrl', min_length=1)

    @field_validator('data_url')
    @classmethod
    def validate_data_url(cls, v):
        """Card captures must be inline data URLs."""
        v = v.strip()
        if not v.startswith('data:'):
            raise ValueError('dataUrl must be a data: URL')
        return v
