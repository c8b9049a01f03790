from sqlmodel import Session, col, select

from cinelog.models.user import User, UserCreate


def get_user_by_id(*, session: Session, user_id: int) -> User | None:
    return session.get(User, user_id)


def get_user_by_username(*, session: Session, username: str) -> User | None:
    """
    Retrieve a user by their username.

    Parameters:
        session (Session): The database session.
        username (str): The username to look for.
    Returns:
        User | None: The user if found, otherwise None.
    """
    stmt = select(User).where(col(User.username) == username)
    return session.exec(stmt).one_or_none()


def create_user(*, session: Session, user_create: UserCreate) -> User:
    """
    Create a new user. Raises an IntegrityError if the username or email is taken.

    Parameters:
        session (Session): The database session.
        user_create (UserCreate): The user data, with the password already hashed.
    Returns:
        User: The created user.
    Raises:
        IntegrityError: If the username or email already exists.
    """
    db_obj = User.model_validate(user_create)
    session.add(db_obj)
    session.flush()
    return db_obj
