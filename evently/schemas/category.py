from pydantic import BaseModel
from typing import Optional

class CategoryCreate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None

class CategoryUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
