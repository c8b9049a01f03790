from enum import Enum, unique


@unique
class MovieCollection(str, Enum):
    NOW_PLAYING = "now_playing"
    POPULAR = "popular"
    TOP_RATED = "top_rated"
    UPCOMING = "upcoming"

    @classmethod
    def parse(cls, name: str | None) -> "MovieCollection":
        """Map a collection name to a member, falling back to NOW_PLAYING."""
        if not name:
            return cls.NOW_PLAYING
        try:
            return cls(name)
        except ValueError:
            return cls.NOW_PLAYING

    @property
    def is_local(self) -> bool:
        """Popular and top rated are ranked from local engagement data."""
        return self in (MovieCollection.POPULAR, MovieCollection.TOP_RATED)


@unique
class IntegrityKind(str, Enum):
    UNIQUE = "unique"
    FOREIGN_KEY = "foreign_key"
    CHECK = "check"
    OTHER = "other"
