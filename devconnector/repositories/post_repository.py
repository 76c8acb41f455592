"""Post repository."""

from devconnector.models import Post

from .base import BaseRepository


class PostRepository(BaseRepository[Post]):
    """Repository for Post operations."""

    model = Post

    def delete_by_user_id(self, user_id: str) -> int:
        """Delete every post authored by a user. Returns the number removed."""
        deleted = (
            self.session.query(Post)
            .filter(Post.user_id == user_id)
            .delete(synchronize_session=False)
        )
        self.session.flush()
        return deleted
