"""Fixture-backed data provider, standing in for live transport."""

import json
import logging
from pathlib import Path
from typing import Any

from .exceptions import PayloadError
from .options import ApiVersion, RouteOptions
from .persistence import decode_options
from .response import parse_response
from .routes import DirectionsResponse

logger = logging.getLogger(__name__)

DEFAULT_FIXTURE = Path(__file__).resolve().parent.parent / "data" / "sample_directions.json"


def load_json(path: Path | str) -> Any:
    """Read a JSON document from disk.

    Raises:
        PayloadError: If the file cannot be read or is not valid JSON
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise PayloadError(f"Failed to read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise PayloadError(f"Invalid JSON in {path}: {e}") from e


class FixtureDataProvider:
    """A data provider that serves directions from a JSON fixture file.

    The fixture is an object with two keys: ``options``, a persisted route
    options record, and ``response``, the directions payload answering it.
    An optional ``version`` key selects the API version of the payload.
    """

    def __init__(self, fixture_path: Path | str | None = None):
        """Initialize the provider.

        Args:
            fixture_path: Fixture to serve; the bundled sample when omitted
        """
        self.fixture_path = Path(fixture_path) if fixture_path else DEFAULT_FIXTURE

    def load_fixture(self) -> dict[str, Any]:
        """Load and sanity-check the fixture document.

        Raises:
            PayloadError: If the fixture cannot be read or is not an object
        """
        fixture = load_json(self.fixture_path)
        if not isinstance(fixture, dict):
            raise PayloadError(f"Fixture {self.fixture_path} is not a JSON object")
        logger.info(f"Loaded directions fixture from {self.fixture_path}")
        return fixture

    def fixture_options(self) -> RouteOptions:
        """Decode the route options stored in the fixture.

        Raises:
            PayloadError: If the fixture carries no decodable options
        """
        return self._options_from(self.load_fixture())

    def search_for_routes(
        self, options: RouteOptions | None = None
    ) -> DirectionsResponse | None:
        """Answer a route request from the fixture.

        Args:
            options: Request to answer; the fixture's own options when omitted

        Returns:
            The decoded response, or None if the fixture payload is unusable
        """
        fixture = self.load_fixture()
        if options is None:
            options = self._options_from(fixture)
        return parse_response(options, fixture.get("response"))

    def _options_from(self, fixture: dict[str, Any]) -> RouteOptions:
        options = decode_options(fixture.get("options"))
        if options is None:
            raise PayloadError(
                f"Fixture {self.fixture_path} does not carry decodable route options"
            )
        token = fixture.get("version", ApiVersion.V5.value)
        version = ApiVersion.from_string(token)
        if version is None:
            logger.debug(
                f"Ignoring unknown API version {token!r} in {self.fixture_path}"
            )
        else:
            options.version = version
        return options
