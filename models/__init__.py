from .content import Content  # noqa: F401
from .share_link import ShareLink  # noqa: F401
from .user import User  # noqa: F401
