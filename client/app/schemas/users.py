# client/app/schemas/users.py

from typing import Optional

from ._base import ApiModel


class UserRead(ApiModel):
    id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    profile_image_url: Optional[str] = None
    role: str = "customer"  # customer, business_owner, admin
