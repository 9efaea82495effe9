"""Download the price list documents over plain HTTP(S)."""

from datetime import timedelta
from os import PathLike
from pathlib import Path
from typing import Optional, Union

from cachier import cachier, set_global_params
from requests import Session, get
from requests.exceptions import JSONDecodeError, RequestException

from .exceptions import DocumentDecodeError, FetchError
from .logger import logger

# disable caching by default
set_global_params(caching_enabled=False, stale_after=timedelta(days=1))


@cachier(separate_files=True)
def _get_json(url: str, timeout: float) -> dict:
    """Download and decode a JSON document, optionally cached on disk."""
    response = get(url, timeout=timeout)
    response.raise_for_status()
    return response.json()


class Fetcher:
    """Retrieve documents by URL.

    Args:
        timeout: Seconds to wait for connecting to and reading from the server.
        chunk_size: Number of bytes to write at once when downloading to a file.
        session: Optional `requests` session to reuse connections.
    """

    def __init__(
        self,
        timeout: float = 300,
        chunk_size: int = 1024 * 1024,
        session: Optional[Session] = None,
    ):
        self.timeout = timeout
        self.chunk_size = chunk_size
        self.session = session or Session()

    def fetch(self, url: str) -> bytes:
        """Download a document into memory."""
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except RequestException as exc:
            raise FetchError(f"Failed to fetch {url}: {exc}") from exc
        return response.content

    def fetch_json(self, url: str) -> dict:
        """Download and decode a JSON document.

        Caching on disk can be enabled via [cachier.set_global_params][].
        """
        logger.debug("Fetching %s", url)
        try:
            return _get_json(url, self.timeout)
        except JSONDecodeError as exc:
            raise DocumentDecodeError(f"Failed to decode {url}: {exc}") from exc
        except RequestException as exc:
            raise FetchError(f"Failed to fetch {url}: {exc}") from exc

    def download(self, url: str, path: Union[str, PathLike]) -> Path:
        """Stream a document into a local file.

        A partially written file is removed when the download fails.

        Returns:
            Path to the downloaded file.
        """
        path = Path(path)
        logger.debug("Downloading %s to %s", url, path)
        try:
            with self.session.get(url, stream=True, timeout=self.timeout) as response:
                response.raise_for_status()
                with open(path, "wb") as f:
                    for chunk in response.iter_content(chunk_size=self.chunk_size):
                        f.write(chunk)
        except (RequestException, OSError) as exc:
            path.unlink(missing_ok=True)
            raise FetchError(f"Failed to download {url}: {exc}") from exc
        return path
