import io
import json
import unittest
from contextlib import redirect_stderr, redirect_stdout

from holdermap.cli.main import main
from holdermap.core.errors import DataSourceError
from holdermap.ports.holder_map_port import HolderMapPort
from holdermap.ports.listing_port import ListingPort
from holdermap.ports.market_data_port import MarketDataPort
from holdermap.services.fusion_service import TokenFusionService

TOKEN = "0x1111111111111111111111111111111111111111"


class _Down(HolderMapPort, MarketDataPort, ListingPort):
    def get_map_data(self, chain_id, token_address):
        raise DataSourceError("down")

    def get_map_metadata(self, chain_id, token_address):
        raise DataSourceError("down")

    def search_pairs(self, query):
        raise DataSourceError("down")

    def get_listing(self, chain_id, token_address):
        raise DataSourceError("down")


class CliTests(unittest.TestCase):
    def _service(self) -> TokenFusionService:
        down = _Down()
        return TokenFusionService(holders=down, market=down, listing=down)

    def test_json_output_when_everything_is_down(self) -> None:
        buf = io.StringIO()
        with redirect_stdout(buf):
            code = main(["--chain", "ethereum", "--address", TOKEN, "--json", "--log-level", "CRITICAL"],
                        service=self._service())

        self.assertEqual(code, 0)
        data = json.loads(buf.getvalue())
        self.assertEqual(data["chain_id"], "eth")
        self.assertEqual(data["token_address"], TOKEN)
        self.assertIsNone(data["market"]["price"])
        self.assertEqual(len(data["failed_sources"]), 4)

    def test_unknown_chain_exits_2(self) -> None:
        err = io.StringIO()
        with redirect_stderr(err):
            code = main(["--chain", "dogechain", "--address", TOKEN], service=self._service())

        self.assertEqual(code, 2)
        self.assertIn("Unknown chain", err.getvalue())


if __name__ == "__main__":
    unittest.main()
