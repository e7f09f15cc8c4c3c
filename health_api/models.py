import datetime as dt
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class RawSample(BaseModel):
    # strings separados por \n, alineados por posicion
    values: str = Field("", examples=["72\n75\n80"])
    timestamps: str = Field("", examples=["2021-06-01T08:00:00+02:00\n2021-06-01T08:05:00+02:00\n2021-06-01T08:10:00+02:00"])


class IngestPayload(BaseModel):
    heart: RawSample
    steps: RawSample
    date: dt.date = Field(..., examples=["2021-06-01"])  # fecha local del dispositivo, sin hora


class Sample(BaseModel):
    value: int = Field(..., examples=[75])
    timestamp: str = Field(..., examples=["2021-06-01T06:00:00.000Z"])


class DailyEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    heart_rate: List[Sample] = Field(default_factory=list, alias="heartRate")
    steps: List[Sample] = Field(default_factory=list)
    date: str = Field(..., examples=["2021-06-01T00:00:00.000Z"])

    def to_input(self) -> dict:
        """Serializa la entrada con los nombres que espera EntryInput en el store."""
        return self.model_dump(by_alias=True)
