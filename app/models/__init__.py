from app.models.media import Media
from app.models.author import Author
from app.models.category import Category
from app.models.article import Article

__all__ = ["Media", "Author", "Category", "Article"]
