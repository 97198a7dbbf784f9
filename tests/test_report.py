import json
import tempfile
import unittest
from decimal import Decimal
from pathlib import Path

from holdermap.core.models import Cluster, FusedTokenRecord
from holdermap.io.output_writer import write_record_json, write_report_txt
from holdermap.io.report import format_big_number, format_pct, format_signed, render_report, time_ago
from holdermap.io.schemas import record_to_dict

TOKEN = "0x1111111111111111111111111111111111111111"
NOW = 1_700_000_000


class FormatterTests(unittest.TestCase):
    def test_big_numbers(self) -> None:
        self.assertEqual(format_big_number(1_500_000), "$1.5M")
        self.assertEqual(format_big_number(2_000_000_000_000), "$2.0T")
        self.assertEqual(format_big_number(1234), "$1.2K")
        self.assertEqual(format_big_number(56), "$56")
        self.assertEqual(format_big_number(None), "")

    def test_pct_and_sign(self) -> None:
        self.assertEqual(format_pct(Decimal("12.345")), "12.3%")
        self.assertEqual(format_signed(format_pct(Decimal("-3"))), "(-3.0%)")
        self.assertEqual(format_signed(format_pct(Decimal("3"))), "(+3.0%)")
        self.assertEqual(format_signed(""), "")

    def test_time_ago(self) -> None:
        self.assertEqual(time_ago(NOW - 90, NOW), "1m ago")
        self.assertEqual(time_ago(NOW - 3 * 3600 - 120, NOW), "3h 2m ago")
        self.assertEqual(time_ago(NOW - 2 * 86400 - 3600, NOW), "2d 1h ago")
        self.assertEqual(time_ago(None, NOW), "")


class ReportTests(unittest.TestCase):
    def test_identity_only_record_renders(self) -> None:
        record = FusedTokenRecord(chain_id="eth", token_address=TOKEN, failed_sources=["market"])

        text = render_report(record, now_ts=NOW)

        self.assertIn(TOKEN, text)
        self.assertIn("#eth", text)
        self.assertIn(f"https://app.bubblemaps.io/eth/token/{TOKEN}", text)
        self.assertIn("Unavailable: market", text)
        self.assertNotIn("Token Stats", text)

    def test_full_record_sections(self) -> None:
        record = FusedTokenRecord(
            chain_id="eth",
            token_address=TOKEN,
            name="Token",
            ticker="TKN",
            price=Decimal("2"),
            daily_price_chg_pct=Decimal("5"),
            market_cap=500,
            daily_dex_vol=1500,
            daily_dex_txs=1234,
            circ_supply=250,
            group_sizes=(10,),
            wallet_pct={10: Decimal("146")},
            holder_pct={10: Decimal("66")},
            top_clusters=[Cluster(addresses=frozenset({"A", "B", "C"}), total_amount=Decimal("160"))],
            bm_map_data_timestamp=NOW - 60,
        )

        text = render_report(record, now_ts=NOW)

        self.assertIn("Token (TKN)", text)
        self.assertIn("Top 10: 146.0%", text)
        self.assertIn("Top 10 (exc contracts): 66.0%", text)
        self.assertIn("Cluster 1: 64.0%", text)
        self.assertIn("Price: $2 (+5.0%)", text)
        self.assertIn("24h Dex Tx Count: 1,234", text)
        self.assertIn("Last Update: 1m ago", text)


class OutputWriterTests(unittest.TestCase):
    def test_json_and_text_files(self) -> None:
        record = FusedTokenRecord(
            chain_id="eth",
            token_address=TOKEN,
            price=Decimal("0.00001"),
            wallet_pct={10: Decimal("12.5")},
            top_clusters=[Cluster(addresses=frozenset({"B", "A"}), total_amount=Decimal("3"))],
        )
        with tempfile.TemporaryDirectory() as tmp:
            json_path = write_record_json(record, tmp)
            txt_path = write_report_txt(record, tmp, now_ts=NOW)

            data = json.loads(Path(json_path).read_text(encoding="utf-8"))
            self.assertEqual(data, record_to_dict(record))
            self.assertEqual(data["market"]["price"], "0.00001")
            self.assertEqual(data["holders"]["wallet_pct"], {"10": "12.5"})
            self.assertEqual(data["holders"]["top_clusters"][0]["addresses"], ["A", "B"])
            self.assertTrue(Path(txt_path).read_text(encoding="utf-8").startswith(TOKEN))


if __name__ == "__main__":
    unittest.main()
