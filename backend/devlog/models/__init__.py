from devlog.models.member import Member
from devlog.models.post import Post

__all__ = ["Member", "Post"]
