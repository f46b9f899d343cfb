from pydantic import BaseModel, ConfigDict


class ParticipantCreate(BaseModel):
    name: str
    version: int  # session version for optimistic locking


class ParticipantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    name: str
