"""
Tests for the GameInterface/EnvInterface adapters.
"""

import numpy as np
import pytest


class TestArrowBlastGame:
    """Tests for ArrowBlastGame."""

    def test_game_metadata(self):
        """Test game has correct metadata."""
        from arrow_blast.game.arrow_blast_game import ArrowBlastGame

        metadata = ArrowBlastGame.get_metadata()

        assert metadata.id == "arrow_blast"
        assert metadata.name == "Arrow Blast"
        assert "dqn" in metadata.recommended_algorithms

    def test_implements_game_interface(self, small_config):
        """Test the game is a GameInterface whose legal actions start with wait."""
        from arrow_blast.core.game_interface import GameInterface
        from arrow_blast.game.arrow_blast_game import ArrowBlastGame

        game = ArrowBlastGame(small_config)

        assert isinstance(game, GameInterface)
        assert game.legal_actions()[0] == 0
        assert all(game.is_valid_action(a) for a in game.legal_actions())

    def test_action_space(self, small_config):
        """Test one wait action plus one per arrow cell."""
        from arrow_blast.game.arrow_blast_game import ArrowBlastGame

        game = ArrowBlastGame(small_config)

        assert game.action_space_size == 17
        assert len(game.action_names) == 17
        assert game.action_names[0] == "Wait"
        assert game.action_to_cell(6) == (1, 1)
        assert game.cell_to_action((1, 1)) == 6

    def test_reset_state(self, small_config):
        """Test reset returns a presentable state dict."""
        from arrow_blast.game.arrow_blast_game import ArrowBlastGame

        game = ArrowBlastGame(small_config)
        state = game.reset()

        for key in ("wall", "arrows", "slots", "status", "score", "game_over"):
            assert key in state
        assert state["game_over"] is False

    def test_seeds_advance_per_episode(self, small_config):
        """Test each reset generates the next seed."""
        from arrow_blast.game.arrow_blast_game import ArrowBlastGame

        game = ArrowBlastGame(small_config)
        first = game.level_seed
        game.reset()

        assert game.level_seed == first + 1
        game.seed(100)
        game.reset()
        assert game.level_seed == 100

    def test_collect_reward(self, mixed_level):
        """Test collecting an arrow is rewarded."""
        from arrow_blast.game.arrow_blast_game import ArrowBlastGame

        game = ArrowBlastGame(blueprint=mixed_level)
        _, reward, done, info = game.step(game.cell_to_action((0, 1)))

        assert info["collect_result"] == "collected"
        assert info["blocks_destroyed_this_step"] == 1
        assert reward > 0
        assert not done

    def test_blocked_attempt_penalized(self, blocked_column_level):
        """Test a blocked collect is penalized."""
        from arrow_blast.game.arrow_blast_game import ArrowBlastGame

        game = ArrowBlastGame(blueprint=blocked_column_level)
        _, reward, _, info = game.step(game.cell_to_action((0, 1)))

        assert info["collect_result"] == "blocked_by_arrow"
        assert reward < 0

    def test_invalid_action(self, mixed_level):
        """Test actions outside the space raise ValueError."""
        from arrow_blast.game.arrow_blast_game import ArrowBlastGame

        game = ArrowBlastGame(blueprint=mixed_level)

        assert not game.is_valid_action(game.action_space_size)
        with pytest.raises(ValueError):
            game.step(game.action_space_size)

    def test_play_to_win(self, mixed_level):
        """Test a greedy player clears a balanced level."""
        from arrow_blast.game.arrow_blast_game import ArrowBlastGame

        game = ArrowBlastGame(blueprint=mixed_level)
        done = False
        info = {}
        while not done:
            legal = game.legal_actions()
            _, _, done, info = game.step(legal[1] if len(legal) > 1 else 0)

        assert info["outcome"] == "won"
        assert game.get_score() == 40

    def test_truncation(self, mixed_level):
        """Test episodes end after max_steps."""
        from arrow_blast.game.arrow_blast_game import ArrowBlastGame
        from arrow_blast.utils.config_loader import Config

        config = Config()
        config.session.max_steps = 3
        game = ArrowBlastGame(config, blueprint=mixed_level)
        for _ in range(2):
            assert game.step(0)[2] is False
        _, _, done, info = game.step(0)

        assert done
        assert info["truncated"]
        assert info["outcome"] == "playing"

    def test_recording(self, mixed_level):
        """Test recorded frames include the events of each step."""
        from arrow_blast.game.arrow_blast_game import ArrowBlastGame

        game = ArrowBlastGame(blueprint=mixed_level)
        game.start_recording()
        game.step(game.cell_to_action((0, 1)))
        history = game.stop_recording()

        assert len(history) == 2
        types = {e["type"] for e in history[1]["events"]}
        assert {"ArrowCollected", "BlockDestroyed"} <= types


class TestArrowBlastEnv:
    """Tests for ArrowBlastEnv observations."""

    def test_observation_shape(self, small_config):
        """Test the observation matches state_size."""
        from arrow_blast.game.arrow_blast_env import ArrowBlastEnv

        env = ArrowBlastEnv(small_config)
        obs = env.reset()

        # 16 cells * 8 + 4 columns * 8 + 5 slots * 7 + 2
        assert env.state_size == 197
        assert obs.shape == (197,)
        assert obs.dtype == np.float32

    def test_step_returns_observation(self, small_config):
        """Test step returns an observation, reward, done and info."""
        from arrow_blast.game.arrow_blast_env import ArrowBlastEnv

        env = ArrowBlastEnv(small_config)
        env.reset()
        obs, reward, done, info = env.step(0)

        assert obs.shape == (env.state_size,)
        assert isinstance(reward, float)
        assert "score" in info

    def test_action_mask(self, blocked_column_level):
        """Test only wait and the free arrow are unmasked."""
        from arrow_blast.game.arrow_blast_env import ArrowBlastEnv

        env = ArrowBlastEnv(blueprint=blocked_column_level)
        mask = env.action_mask()

        assert mask.shape == (3,)
        assert mask.tolist() == [True, True, False]

    def test_cell_features(self, blocked_column_level):
        """Test occupied, escapable and color features of the arrow cells."""
        from arrow_blast.game.arrow_blast_env import ArrowBlastEnv
        from arrow_blast.game.types import Color

        env = ArrowBlastEnv(blueprint=blocked_column_level)
        obs = env.reset()
        upper, lower = obs[0:8], obs[8:16]

        assert upper[0] == 1.0 and upper[1] == 1.0 and upper[2 + Color.BLUE] == 1.0
        assert lower[0] == 1.0 and lower[1] == 0.0 and lower[2 + Color.RED] == 1.0
        assert obs[-2] == 1.0 and obs[-1] == 1.0

    def test_seed_selects_level(self, small_config):
        """Test seeding makes levels reproducible."""
        from arrow_blast.game.arrow_blast_env import ArrowBlastEnv

        env = ArrowBlastEnv(small_config)
        env.seed(5)
        first = env.reset()
        env.seed(5)
        second = env.reset()

        assert np.array_equal(first, second)

    def test_replay(self, mixed_level):
        """Test recorded episodes can be fetched as replays."""
        from arrow_blast.game.arrow_blast_env import ArrowBlastEnv

        env = ArrowBlastEnv(blueprint=mixed_level)
        env.reset(record=True)
        env.step(0)

        assert env.is_recording()
        assert len(env.get_replay()) == 2
