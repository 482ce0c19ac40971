from typing import Any, List, Optional

from shortlinks_app.common.logging_config import get_logger
from shortlinks_app.common.validators import is_valid_custom_code, is_valid_uri
from shortlinks_app.exceptions import (
    CustomCodeTakenError,
    DuplicateCodeError,
    InvalidCustomCodeError,
    InvalidUrlError,
    LinkNotFoundError,
    StorageError,
)
from shortlinks_app.models.link import Link
from shortlinks_app.services.link_store import LinkStore, MAX_LIST_LIMIT
from shortlinks_app.services.short_code_strategies import ShortCodeStrategy, RandomShortCodeStrategy

logger = get_logger(__name__)


class LinkService:
    """
    Link service with the store and code strategy injected.

    Validates input before the store is touched, allocates short codes and
    tracks clicks. Knows nothing about HTTP; failures are raised as
    ShortlinksError subclasses.
    """

    def __init__(
        self,
        store: LinkStore,
        short_code_strategy: Optional[ShortCodeStrategy] = None,
        base_url: Optional[str] = None,
        custom_code_max_length: int = 64,
        list_limit: int = MAX_LIST_LIMIT,
    ):
        """
        Args:
            store: Link store (owns persistence)
            short_code_strategy: Generator for codes when no custom code is given
            base_url: Public base of short URLs; None means "use the request's"
            custom_code_max_length: Longest accepted custom code
            list_limit: Number of links returned by list_links
        """
        self.store = store
        self.short_code_strategy = short_code_strategy or RandomShortCodeStrategy()
        self.base_url = base_url
        self.custom_code_max_length = custom_code_max_length
        self.list_limit = list_limit

    def shorten(self, url: Any, custom_code: Any = None) -> Link:
        """Create a new link

        Note: Always creates a new link even if the URL was shortened before.

        Process:
        1. Validate the URL (and the custom code, when one is given)
        2. Reject custom codes that are taken, or generate a random code
        3. Insert; a duplicate custom code is reported as taken, any other
           failed insert becomes a generic storage error

        Raises:
            InvalidUrlError, InvalidCustomCodeError, CustomCodeTakenError, StorageError
        """
        if not is_valid_uri(url):
            raise InvalidUrlError()

        if custom_code:
            valid, message = is_valid_custom_code(custom_code, self.custom_code_max_length)
            if not valid:
                raise InvalidCustomCodeError(message)
            if self.store.exists(custom_code):
                raise CustomCodeTakenError()
            short_code = custom_code
        else:
            short_code = self.short_code_strategy.generate(self.store.exists)

        try:
            link = self.store.create(short_code, url)
        except StorageError as exc:
            # Lost a race for the same custom code after the exists() check
            if custom_code and isinstance(exc, DuplicateCodeError):
                raise CustomCodeTakenError() from exc
            logger.error("Failed to create link %s: %s", short_code, exc)
            raise StorageError("Failed to create shortlink") from exc

        logger.info("Created link %s -> %s", link.short_code, link.original_url)
        return link

    def get_link(self, short_code: str) -> Link:
        """Get link by short code, raising LinkNotFoundError on a miss"""
        link = self.store.find_by_code(short_code)
        if link is None:
            raise LinkNotFoundError()
        return link

    def list_links(self) -> List[Link]:
        return self.store.list_recent(self.list_limit)

    def resolve(self, short_code: str) -> str:
        """
        Get the original URL for a redirect and count the click.

        An unknown code raises LinkNotFoundError and leaves the store untouched.
        """
        link = self.store.find_by_code(short_code)
        if link is None:
            logger.debug("Redirect miss for %s", short_code)
            raise LinkNotFoundError()

        self.store.increment_clicks(short_code)
        return link.original_url

    def build_short_url(self, short_code: str, request_base_url: str) -> str:
        base = self.base_url or request_base_url
        return f"{base.rstrip('/')}/{short_code}"
