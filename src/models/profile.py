"""
用户资料模型
"""

from pydantic import BaseModel


class CurrentUser(BaseModel):
    """当前请求的用户身份"""
    id: str
    token: str
    email: str = ""
    metadata_name: str = ""


class Profile(BaseModel):
    """用户资料"""
    id: str
    display_name: str
