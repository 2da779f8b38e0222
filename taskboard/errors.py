"""Board state errors

Raised by the state engine when a caller asks for something that would break a
structural rule. The HTTP layer turns them into responses using ``status_code``.
"""


class BoardError(Exception):
    """Base class for rejected board operations"""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EmptyField(BoardError):
    """A required name, title or email was blank"""


class DuplicateName(BoardError):
    """A board, column or user with the same name already exists"""

    status_code = 409


class DuplicateTitle(DuplicateName):
    """A task with the same title already exists on the board"""


class NoColumns(BoardError):
    """The board has no columns to put a task in"""


class NotFound(BoardError):
    """A board, column, task, subtask or user does not exist"""

    status_code = 404


class InvalidColumns(BoardError):
    """A bulk column list does not match the board's columns"""


class InvalidMove(BoardError):
    """A task replacement list contains tasks of another board"""


class DragInProgress(BoardError):
    """The store is read-only while a drag gesture is active"""

    status_code = 409
