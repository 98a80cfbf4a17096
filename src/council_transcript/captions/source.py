"""Load a caption payload from a local file or an HTTP(S) URL."""

from pathlib import Path

import httpx

from council_transcript.config.schema import SourceConfig
from council_transcript.core import CaptionError
from council_transcript.core.resilience import retry_network
from council_transcript.utils import get_logger

logger = get_logger(__name__)


def is_url(source: str | Path) -> bool:
    return isinstance(source, str) and source.lower().startswith(("http://", "https://"))


def load_caption_payload(
    source: str | Path,
    config: SourceConfig | None = None,
    client: httpx.Client | None = None,
) -> str:
    """Return the caption text for `source`.

    Args:
        source: File path or http(s) URL
        config: Download settings (timeouts, retries, user agent)
        client: Optional pre-built httpx client (tests inject a mock transport)

    Raises:
        CaptionError: If the file is unreadable or the download fails
    """
    config = config or SourceConfig()

    if is_url(source):
        return _download(str(source), config, client)

    path = Path(source)
    if not path.is_file():
        raise CaptionError(f"Caption file not found: {path}")
    try:
        return path.read_text(encoding=config.encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise CaptionError(f"Could not read caption file {path}: {e}") from e


def _download(url: str, config: SourceConfig, client: httpx.Client | None) -> str:
    owns_client = client is None
    if client is None:
        client = httpx.Client(
            timeout=config.timeout_seconds,
            headers={"User-Agent": config.user_agent, "Accept": "text/vtt, text/plain;q=0.9, */*;q=0.8"},
            follow_redirects=True,
        )

    @retry_network(
        max_attempts=config.max_attempts,
        max_delay=config.max_retry_delay_seconds,
        min_wait=config.retry_min_wait_seconds,
    )
    def fetch() -> httpx.Response:
        response = client.get(url)
        response.raise_for_status()
        return response

    try:
        response = fetch()
    except httpx.HTTPStatusError as e:
        raise CaptionError(f"Caption download failed with HTTP {e.response.status_code}: {url}") from e
    except httpx.HTTPError as e:
        raise CaptionError(f"Caption download failed: {url}: {e}") from e
    finally:
        if owns_client:
            client.close()

    logger.info(f"Downloaded caption track ({len(response.content)} bytes) from {url}")
    return response.text
