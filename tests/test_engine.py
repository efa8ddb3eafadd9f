import unittest

from catan_practice.config import DraftConfig
from catan_practice.domain.codec import DecodeError
from catan_practice.domain.validation import vertex_pip_total
from catan_practice.game import (
    ACTION_PLACE_SETUP_ROAD,
    DraftPhase,
    DraftSession,
    PipGreedyPolicy,
    RandomPolicy,
    list_legal_actions,
    new_game,
    place_setup_settlement,
)


class AlwaysVertexZeroPolicy:
    def decide(self, state, legal_actions):
        return place_setup_settlement(0)


class DraftConfigTests(unittest.TestCase):
    def test_defaults(self) -> None:
        config = DraftConfig()
        self.assertEqual(config.player_count, 4)
        self.assertFalse(config.skip_roads)
        self.assertIsNone(config.seed)

    def test_rejects_bad_player_count(self) -> None:
        with self.assertRaises(ValueError):
            DraftConfig(player_count=1)
        with self.assertRaises(ValueError):
            DraftConfig(player_count=5)

    def test_rejects_zero_attempts(self) -> None:
        with self.assertRaises(ValueError):
            DraftConfig(max_generation_attempts=0)

    def test_new_game_uses_config(self) -> None:
        state = new_game(DraftConfig(player_count=3, skip_roads=True, seed=8))
        self.assertEqual(state.player_count, 3)
        self.assertTrue(state.skip_roads)
        self.assertEqual(state.setup_order, (1, 2, 3, 3, 2, 1))


class DraftSessionTests(unittest.TestCase):
    def test_autoplay_completes_draft(self) -> None:
        session = DraftSession(DraftConfig(seed=21))
        ticks = session.autoplay()
        self.assertEqual(ticks, 16)
        self.assertTrue(session.is_finished())
        self.assertEqual(session.state.settlement_count(), 8)
        self.assertEqual(session.state.road_count(), 8)
        self.assertIsNone(session.play_tick())

    def test_autoplay_with_skip_roads(self) -> None:
        session = DraftSession(DraftConfig(seed=22, skip_roads=True))
        self.assertEqual(session.autoplay(), 8)
        self.assertEqual(session.state.road_count(), 0)

    def test_autoplay_stops_at_seat(self) -> None:
        session = DraftSession(DraftConfig(seed=23))
        ticks = session.autoplay(until_player=3)
        self.assertEqual(ticks, 4)
        self.assertEqual(session.state.current_player_id, 3)
        self.assertEqual(session.state.phase, DraftPhase.PLACING_SETTLEMENT)

    def test_autoplay_respects_tick_cap(self) -> None:
        session = DraftSession(DraftConfig(seed=24))
        self.assertEqual(session.autoplay(max_ticks=3), 3)
        self.assertEqual(len(session.state.history), 3)

    def test_session_seed_makes_boards_reproducible(self) -> None:
        first = DraftSession(DraftConfig(seed=25))
        second = DraftSession(DraftConfig(seed=25))
        self.assertEqual(first.save_board(), second.save_board())
        first.new_board()
        second.new_board()
        self.assertEqual(first.save_board(), second.save_board())

    def test_rejected_placement_keeps_state(self) -> None:
        session = DraftSession(DraftConfig(seed=26))
        before = session.state
        self.assertFalse(session.place_settlement(999))
        self.assertIs(session.state, before)
        self.assertIsNotNone(session.last_rejection)
        self.assertFalse(session.place_road((0, 1)))
        self.assertIn("only valid while placing roads", session.last_rejection.reason)

    def test_accepted_placement_clears_rejection(self) -> None:
        session = DraftSession(DraftConfig(seed=27))
        session.place_settlement(999)
        vertex_id = min(session.legal_settlement_vertices)
        self.assertTrue(session.place_settlement(vertex_id))
        self.assertIsNone(session.last_rejection)
        self.assertTrue(session.legal_road_edges)
        self.assertTrue(session.place_road(min(session.legal_road_edges)))
        self.assertEqual(session.state.current_player_id, 2)

    def test_undo_and_confirmation_flags(self) -> None:
        session = DraftSession(DraftConfig(seed=28))
        self.assertFalse(session.can_undo())
        self.assertFalse(session.requires_new_board_confirmation())
        self.assertFalse(session.undo())

        start = session.state
        session.place_settlement(min(session.legal_settlement_vertices))
        self.assertTrue(session.can_undo())
        self.assertTrue(session.requires_new_board_confirmation())
        self.assertTrue(session.undo())
        self.assertEqual(session.state, start)

    def test_new_board_clears_history(self) -> None:
        session = DraftSession(DraftConfig(seed=29))
        session.autoplay(max_ticks=5)
        state = session.new_board()
        self.assertIs(session.state, state)
        self.assertEqual(state.history, [])
        self.assertEqual(state.current_player_id, 1)
        self.assertEqual(state.phase, DraftPhase.PLACING_SETTLEMENT)

    def test_save_and_load_round_trip(self) -> None:
        source = DraftSession(DraftConfig(seed=30))
        text = source.save_board()
        target = DraftSession(DraftConfig(seed=31))
        target.autoplay(max_ticks=2)
        state = target.load_board(text)
        self.assertEqual(state.board.tiles, source.state.board.tiles)
        self.assertEqual(state.history, [])
        self.assertEqual(target.save_board(), text)

    def test_load_keeps_skip_roads_setting(self) -> None:
        text = DraftSession(DraftConfig(seed=32)).save_board()
        session = DraftSession(DraftConfig(seed=33, skip_roads=True))
        self.assertTrue(session.load_board(text).skip_roads)

    def test_failed_load_keeps_current_draft(self) -> None:
        session = DraftSession(DraftConfig(seed=34))
        session.autoplay(max_ticks=3)
        before = session.state
        with self.assertRaises(DecodeError):
            session.load_board("catan1:nonsense")
        self.assertIs(session.state, before)
        self.assertEqual(len(session.state.history), 3)

    def test_illegal_policy_action_raises(self) -> None:
        session = DraftSession(DraftConfig(seed=35), policies={1: AlwaysVertexZeroPolicy()})
        session.place_settlement(max(session.legal_settlement_vertices))
        with self.assertRaises(ValueError):
            session.play_tick()

    def test_random_policy_is_seeded(self) -> None:
        config = DraftConfig(seed=36)
        first = DraftSession(config, policies={player_id: RandomPolicy(seed=5) for player_id in range(1, 5)})
        second = DraftSession(config, policies={player_id: RandomPolicy(seed=5) for player_id in range(1, 5)})
        first.autoplay()
        second.autoplay()
        self.assertEqual(first.state.history, second.state.history)


class PipGreedyPolicyTests(unittest.TestCase):
    def test_picks_richest_vertex(self) -> None:
        session = DraftSession(DraftConfig(seed=40))
        state = session.state
        legal_actions = list_legal_actions(state)
        action = PipGreedyPolicy().decide(state, legal_actions)

        best = max(vertex_pip_total(state.board.tiles, vertex_id) for vertex_id in session.legal_settlement_vertices)
        chosen = int(action.data["vertex_id"])
        self.assertEqual(vertex_pip_total(state.board.tiles, chosen), best)
        tied = [
            vertex_id
            for vertex_id in session.legal_settlement_vertices
            if vertex_pip_total(state.board.tiles, vertex_id) == best
        ]
        self.assertEqual(chosen, min(tied))

    def test_places_road_next_to_its_settlement(self) -> None:
        session = DraftSession(DraftConfig(seed=41), policies={1: PipGreedyPolicy()})
        session.play_tick()
        action = session.play_tick()
        self.assertEqual(action.kind, ACTION_PLACE_SETUP_ROAD)
        anchor = next(iter(session.state.players[1].settlements))
        self.assertIn(anchor, action.data["edge"])

    def test_empty_legal_actions_raise(self) -> None:
        session = DraftSession(DraftConfig(seed=42))
        with self.assertRaises(ValueError):
            PipGreedyPolicy().decide(session.state, [])


if __name__ == "__main__":
    unittest.main()
