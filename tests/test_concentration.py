import unittest
from decimal import Decimal

from holdermap.core.dto import HolderNode
from holdermap.services.concentration import compute_concentration, estimate_circulating_supply


def _node(address, amount, pct, contract=False) -> HolderNode:
    return HolderNode(
        address=address,
        amount=Decimal(str(amount)) if amount is not None else None,
        percentage=Decimal(str(pct)) if pct is not None else None,
        is_contract=contract,
    )


class ConcentrationTests(unittest.TestCase):
    def setUp(self) -> None:
        self.nodes = [
            _node("A", 100, 40),
            _node("B", 50, 20),
            _node("C", 10, 4),
            _node("D", 5, 2),
            _node("E", 200, 80, contract=True),
        ]

    def test_example_group_sums(self) -> None:
        stats = compute_concentration(self.nodes)

        self.assertEqual(stats.group_sizes, (10, 25, 100))
        self.assertEqual(stats.wallet_pct[10], Decimal("146"))
        self.assertEqual(stats.holder_pct[10], Decimal("66"))
        # fewer rows than the group size: sum what exists
        self.assertEqual(stats.wallet_pct[100], Decimal("146"))

    def test_rank_window_counts_contract_rows(self) -> None:
        nodes = [_node("K", 1, 30, contract=True)] + [_node(f"W{i}", 1, 1) for i in range(30)]

        stats = compute_concentration(nodes)

        self.assertEqual(stats.wallet_pct[10], Decimal("39"))
        self.assertEqual(stats.holder_pct[10], Decimal("9"))
        self.assertEqual(stats.holder_pct[25], Decimal("24"))
        self.assertEqual(stats.holder_pct[100], Decimal("30"))

    def test_monotonic_group_sums(self) -> None:
        nodes = []
        for i in range(150):
            nodes.append(_node(f"W{i}", i + 1, Decimal("0.5") + Decimal(i % 7) / 10, contract=(i % 9 == 0)))

        stats = compute_concentration(nodes)

        sizes = stats.group_sizes
        for small, big in zip(sizes, sizes[1:]):
            self.assertLessEqual(stats.wallet_pct[small], stats.wallet_pct[big])
            self.assertLessEqual(stats.holder_pct[small], stats.holder_pct[big])
        for g in sizes:
            self.assertLessEqual(stats.holder_pct[g], stats.wallet_pct[g])

    def test_missing_percentage_counts_as_zero(self) -> None:
        stats = compute_concentration([_node("A", 1, None), _node("B", 1, 5)])

        self.assertEqual(stats.wallet_pct[10], Decimal("5"))

    def test_custom_group_sizes(self) -> None:
        stats = compute_concentration(self.nodes, group_sizes=(1, 3))

        self.assertEqual(stats.wallet_pct, {1: Decimal("40"), 3: Decimal("64")})

    def test_empty_node_list(self) -> None:
        stats = compute_concentration([])

        self.assertEqual(stats.wallet_pct[10], Decimal("0"))
        self.assertIsNone(stats.circ_supply)


class CirculatingSupplyTests(unittest.TestCase):
    def test_first_complete_node_wins(self) -> None:
        nodes = [
            _node("A", None, 40),
            _node("B", 50, 20),
            _node("C", 999, 1),
        ]

        self.assertEqual(estimate_circulating_supply(nodes), 250)

    def test_rounds_half_up(self) -> None:
        # 100 * 1 / 8 = 12.5
        self.assertEqual(estimate_circulating_supply([_node("A", 1, 8)]), 13)

    def test_supply_beyond_default_decimal_precision(self) -> None:
        nodes = [
            HolderNode("A", Decimal("1E+28"), Decimal("1")),
            HolderNode("B", Decimal("5E+27"), Decimal("0.5")),
        ]

        self.assertEqual(estimate_circulating_supply(nodes), 10 ** 30)
        self.assertEqual(compute_concentration(nodes).circ_supply, 10 ** 30)

    def test_undefined_without_amount_and_share(self) -> None:
        nodes = [_node("A", None, 10), _node("B", 10, None), _node("C", 0, 10)]

        self.assertIsNone(estimate_circulating_supply(nodes))


if __name__ == "__main__":
    unittest.main()
