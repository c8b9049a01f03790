from .movie import *
from .movie_list import *
from .review import *
from .user import *
