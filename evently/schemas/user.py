from pydantic import BaseModel
from typing import Optional

class ProfileUpdate(BaseModel):
    email: Optional[str] = None
    bio: Optional[str] = None
    profile_picture: Optional[str] = None

class PasswordChange(BaseModel):
    current_password: Optional[str] = None
    new_password: Optional[str] = None

class RoleUpdate(BaseModel):
    role: Optional[str] = None
