from .auth_schemas import *
from .favorite import *
from .follow import *
from .movie import *
from .movie_list import *
from .review import *
from .user import *
from .watched import *

__all__ = [
    "Message",
    "MovieFavorite",
    "Follow",
    "Movie",
    "MovieBase",
    "MovieCreate",
    "MoviePublic",
    "MovieList",
    "MovieListBase",
    "MovieListCreate",
    "MovieListUpdate",
    "MovieListEntry",
    "SavedList",
    "Review",
    "ReviewBase",
    "ReviewCreate",
    "User",
    "UserBase",
    "UserCreate",
    "MovieWatched",
]
