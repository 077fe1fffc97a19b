# schemas.py
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# Requests
# Fields are optional so that missing values surface as API error codes
# instead of generic validation failures.
class RegisterRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class GadgetCreate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


class GadgetUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None


class SelfDestructRequest(CamelModel):
    confirmation_code: Optional[str] = None


# Responses
class CurrentUser(CamelModel):
    id: str
    email: str
    role: str


class UserOut(CamelModel):
    id: str
    email: str
    role: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class AuthResponse(CamelModel):
    message: str
    user: UserOut
    token: str
    expires_in: str


class ProfileResponse(CamelModel):
    message: str
    user: UserOut


class GadgetOut(CamelModel):
    id: str
    name: str
    codename: str
    description: Optional[str] = None
    status: str
    mission_success_probability: int
    probability_text: str
    decommissioned_at: Optional[datetime] = None
    self_destruct_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class GadgetListResponse(CamelModel):
    message: str
    count: int
    gadgets: List[GadgetOut]


class GadgetResponse(CamelModel):
    message: str
    gadget: GadgetOut


class SelfDestructInitiated(CamelModel):
    message: str
    confirmation_code: str
    warning: str
    instructions: str


class SelfDestructCompleted(CamelModel):
    message: str
    gadget: GadgetOut
    timestamp: datetime


class HealthResponse(BaseModel):
    status: str
    message: str
    timestamp: datetime
    environment: str


class WelcomeResponse(BaseModel):
    message: str
    description: str
    version: str
    endpoints: Dict[str, str]
