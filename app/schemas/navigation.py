from pydantic import BaseModel
from typing import List, Optional


class NavigationItem(BaseModel):
    name: str
    href: str


class NavigationMenu(BaseModel):
    items: List[NavigationItem]
    signedIn: bool
    displayName: Optional[str] = None
    getStartedHref: str
    userMenu: List[NavigationItem]
