"""Language service for dependency injection.

Provides a class-based interface to the engine for easier DI and testing.
"""

from typing import Iterable, List, Optional, Union

from langpack.i18n.arguments import LangArg
from langpack.i18n.engine import BroadcastResult, Engine, Sender
from langpack.i18n.factory import create_engine
from langpack.i18n.models import Language, Recipient
from langpack.i18n.values import RenderedOutput


class LangService:
    """Class-based language service.

    Thin facade over an Engine bound to one delivery callback, so callers
    only deal with recipients, fields and arguments.

    Usage:
        service = LangService(send=chat_client.send)
        service.message(recipient, "command.not_found", LangArg("command", name))
        service.broadcast("server.restart", online_recipients)
    """

    def __init__(self, engine: Optional[Engine] = None, send: Optional[Sender] = None):
        """Initialize language service.

        Args:
            engine: Optional pre-configured Engine. If not provided,
                creates default via factory.
            send: Delivery callback used by message() and broadcast().
        """
        self._engine = engine or create_engine()
        self._send = send

    def _sender(self) -> Sender:
        if self._send is None:
            raise RuntimeError("LangService has no delivery callback")
        return self._send

    def get_string(
        self, field: str, language: Union[Language, str, None] = None, *args: LangArg
    ) -> str:
        return self._engine.get_string(field, language, *args)

    def get_list(
        self, field: str, language: Union[Language, str, None] = None, *args: LangArg
    ) -> List[str]:
        return self._engine.get_list(field, language, *args)

    def resolve(
        self, field: str, language: Union[Language, str, None] = None, *args: LangArg
    ) -> RenderedOutput:
        return self._engine.resolve(field, language, *args)

    def language_of(self, recipient: Recipient) -> Language:
        return self._engine.language_of(recipient)

    def message(self, recipient: Recipient, field: str, *args: LangArg) -> RenderedOutput:
        """Send a field to one recipient in the recipient's language.

        Raises:
            RuntimeError: If the service has no delivery callback.
        """
        return self._engine.message(recipient, field, *args, send=self._sender())

    def broadcast(
        self, field: str, recipients: Iterable[Recipient], *args: LangArg
    ) -> BroadcastResult:
        """Send a field to many recipients, resolving once per language.

        Raises:
            RuntimeError: If the service has no delivery callback.
        """
        return self._engine.broadcast(field, recipients, *args, send=self._sender())

    @property
    def engine(self) -> Engine:
        """Access the underlying Engine."""
        return self._engine
