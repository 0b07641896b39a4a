"""Selection subpackage — imports trigger @register_selector decorators."""

from finishem_sync.selection.accept_all import AcceptAllSelector  # noqa: F401
from finishem_sync.selection.prompt import PromptSelector  # noqa: F401
from finishem_sync.selection.texts import FixedTextsSelector  # noqa: F401
