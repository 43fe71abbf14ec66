"""Customer domain schemas - Pydantic models for validation"""

from pydantic import BaseModel

from ..users.schemas import AccountCreate


class CustomerCreate(AccountCreate):
    """Schema for customer self-registration; the role is always CUSTOMER"""


class CustomerLogin(BaseModel):
    email: str
    password: str


class CustomerToken(BaseModel):
    token: str
    expiresIn: int
