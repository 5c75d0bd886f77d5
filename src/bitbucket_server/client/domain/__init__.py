from .commit import Commit
from .commit import Parent
from .commit import Person
from .common import Error
from .common import ErrorsHolder
from .common import Page
from .common import VetoMessage
from .file import Blame
from .file import FilesPage
from .file import LastModified
from .file import Line
from .file import LinePage
from .file import RawContent

__all__ = [
    "Blame",
    "Commit",
    "Error",
    "ErrorsHolder",
    "FilesPage",
    "LastModified",
    "Line",
    "LinePage",
    "Page",
    "Parent",
    "Person",
    "RawContent",
    "VetoMessage",
]
