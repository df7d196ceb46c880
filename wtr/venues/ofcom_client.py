"""
HTTP client for the published Ofcom register.

**Conceptual**: This module provides a thin wrapper around HTTP requests to
the location the register CSV is published at. It handles request
construction, error handling and writing the bytes to disk. It does NOT know
anything about the register's columns; that is LicenceCollection's job.

**Design pattern**: "Thin client". The only output is bytes (or a file of
bytes), which is exactly the "readable byte stream" the record layer needs.
"""

from pathlib import Path

import requests

from wtr.config.settings import RegisterSettings

CHUNK_SIZE = 1024 * 1024


class OfcomClientError(Exception):
    """
    Base exception for register download errors.

    Caller can catch OfcomClientError to handle every download failure, or a
    subclass for fine-grained handling.
    """
    pass


class OfcomNotFoundError(OfcomClientError):
    """
    Raised on 404: the register has moved.

    **Recovery**: Find the current URL on Ofcom's site and set WTR_REGISTER_URL.
    """
    pass


class OfcomServerError(OfcomClientError):
    """Raised when the server returns a 5xx error. Retry later."""
    pass


class OfcomClient:
    """
    Thin HTTP client that fetches the register CSV.

    **Example usage**:
        >>> from wtr.config.settings import get_settings
        >>> with OfcomClient(get_settings().register) as client:
        ...     path = client.download_register()
    """

    def __init__(self, settings: RegisterSettings):
        self.settings = settings
        self.session = requests.Session()
        self.session.headers.update({
            "Accept": "text/csv, */*",
            "User-Agent": "wtr/1.0",
        })

    def _get(self, stream: bool = False) -> requests.Response:
        """Issue the GET and translate HTTP / transport failures."""
        url = self.settings.url
        try:
            response = self.session.get(
                url,
                timeout=self.settings.timeout_seconds,
                stream=stream,
            )
        except requests.Timeout as e:
            raise requests.Timeout(
                f"Request to {url} timed out after {self.settings.timeout_seconds}s. "
                f"Check network connection or increase WTR_TIMEOUT_SECONDS."
            ) from e
        except requests.ConnectionError as e:
            raise OfcomClientError(
                f"Failed to connect to {url}. Check network connection and WTR_REGISTER_URL."
            ) from e
        except requests.RequestException as e:
            raise OfcomClientError(f"HTTP request failed: {e}") from e

        if response.status_code == 404:
            raise OfcomNotFoundError(
                f"Register not found at {url} (status 404). "
                f"Ofcom may have moved it; set WTR_REGISTER_URL."
            )

        if response.status_code >= 500:
            raise OfcomServerError(
                f"Server error fetching {url} (status {response.status_code})."
            )

        if response.status_code != 200:
            raise OfcomClientError(
                f"Unexpected status {response.status_code} fetching {url}."
            )

        return response

    def fetch_register(self) -> bytes:
        """
        Download the whole register into memory.

        Returns:
            Raw CSV bytes, suitable for io.BytesIO -> LicenceCollection.read_csv.

        Raises:
            OfcomNotFoundError: 404.
            OfcomServerError: 5xx.
            OfcomClientError: Other statuses, connection failures, empty body.
            requests.Timeout: Request exceeded timeout_seconds.
        """
        response = self._get()
        content = response.content
        if not content:
            raise OfcomClientError(f"Empty response body from {self.settings.url}.")
        return content

    def download_register(self, path: Path | str | None = None) -> Path:
        """
        Stream the register to a local file.

        Args:
            path: Destination (default: settings.csv_path). Parent directories
                  are created. The file is only replaced once the download
                  has completed.

        Returns:
            The path written.

        Raises:
            OfcomClientError: The transfer broke off or the body was empty.
                              No partial file is left behind.
        """
        path = Path(path) if path is not None else self.settings.csv_path
        path.parent.mkdir(parents=True, exist_ok=True)
        partial = path.with_name(path.name + ".part")

        response = self._get(stream=True)
        written = 0
        try:
            with partial.open("wb") as out:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        out.write(chunk)
                        written += len(chunk)
        except requests.RequestException as e:
            partial.unlink(missing_ok=True)
            raise OfcomClientError(
                f"Download from {self.settings.url} failed after {written} bytes: {e}"
            ) from e
        except BaseException:
            partial.unlink(missing_ok=True)
            raise
        finally:
            response.close()

        if written == 0:
            partial.unlink(missing_ok=True)
            raise OfcomClientError(f"Empty response body from {self.settings.url}.")

        partial.replace(path)
        return path

    def close(self):
        """Close the HTTP session and release resources."""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
