import unittest
from unittest import mock

from catan_practice.domain.board import Terrain, adjacent_hex_indices, standard_topology
from catan_practice.domain.randomizer import (
    GenerationExhausted,
    generate_board,
    generate_randomized_board,
)
from catan_practice.domain.validation import (
    NUMBER_TOKENS,
    TERRAIN_COUNTS,
    is_valid_board,
    validate_standard_counts,
    vertex_pip_total,
)


class RandomizerTests(unittest.TestCase):
    def test_randomized_board_has_standard_counts(self) -> None:
        board = generate_randomized_board(seed=42)
        self.assertTrue(validate_standard_counts(board.tiles))

    def test_desert_has_no_number_token(self) -> None:
        board = generate_randomized_board(seed=7)
        deserts = [tile for tile in board.tiles if tile.terrain is Terrain.DESERT]
        self.assertEqual(len(deserts), 1)
        self.assertIsNone(deserts[0].token_number)

    def test_number_tokens_cover_official_set(self) -> None:
        board = generate_randomized_board(seed=99)
        numbers = [tile.token_number for tile in board.tiles if tile.token_number is not None]
        self.assertEqual(sorted(numbers), sorted(NUMBER_TOKENS))

    def test_terrain_count_distribution_is_exact(self) -> None:
        board = generate_randomized_board(seed=101)
        actual_counts = {terrain: 0 for terrain in TERRAIN_COUNTS}
        for tile in board.tiles:
            actual_counts[tile.terrain] += 1
        self.assertEqual(actual_counts, TERRAIN_COUNTS)

    def test_generated_boards_satisfy_every_constraint(self) -> None:
        for seed in range(30):
            tiles = generate_board(seed=seed)
            self.assertTrue(is_valid_board(tiles), msg=f"Invalid board for seed {seed}")
            for tile in tiles:
                for neighbor_id in adjacent_hex_indices(tile.id):
                    neighbor = tiles[neighbor_id]
                    if tile.token_number is not None:
                        self.assertNotEqual(tile.token_number, neighbor.token_number, msg=f"seed {seed}")
                    self.assertNotEqual(
                        {tile.token_number, neighbor.token_number},
                        {6, 8},
                        msg=f"seed {seed}",
                    )
            for vertex_id in standard_topology().vertices:
                self.assertLess(vertex_pip_total(tiles, vertex_id), 13, msg=f"seed {seed}")

    def test_seed_makes_generation_reproducible(self) -> None:
        self.assertEqual(generate_board(seed=5), generate_board(seed=5))

    def test_generation_gives_up_after_attempt_cap(self) -> None:
        with mock.patch(
            "catan_practice.domain.randomizer.is_valid_board",
            return_value=False,
        ) as validator:
            with self.assertRaises(GenerationExhausted):
                generate_randomized_board(seed=3, max_attempts=5)
        self.assertEqual(validator.call_count, 5)

    def test_exhaustion_message_reports_attempts_made(self) -> None:
        with mock.patch(
            "catan_practice.domain.randomizer.is_valid_board",
            return_value=False,
        ) as validator:
            with self.assertRaisesRegex(GenerationExhausted, "after 1 attempts"):
                generate_randomized_board(seed=3, max_attempts=0)
        self.assertEqual(validator.call_count, 1)


if __name__ == "__main__":
    unittest.main()
