"""
Unit tests for the gymnasium environment wrapper.
"""
import numpy as np
import pytest
from conftest import rig_session
from minesweeper import BoardConfig, GameStatus, MinesweeperEnv


@pytest.fixture
def env() -> MinesweeperEnv:
    """4x4 environment rigged with one mine at (0, 0)."""
    environment = MinesweeperEnv(
        config=BoardConfig(width=4, height=4, num_mines=1), render_mode="ansi"
    )
    environment.reset(seed=0)
    rig_session(environment.session, [(0, 0)])
    return environment


class TestSpaces:
    """Test observation and action spaces."""

    def test_default_spaces_match_reference_board(self) -> None:
        environment = MinesweeperEnv()
        assert environment.observation_space.shape == (18, 27)
        assert environment.action_space.n == 18 * 27

    def test_reset_observation(self, env: MinesweeperEnv) -> None:
        obs, info = env.reset(seed=1)
        assert obs.shape == (4, 4)
        assert obs.dtype == np.int8
        assert np.all(obs == -1)
        assert info["game_state"] == "IN_PROGRESS"
        assert info["total_safe"] == 15

    def test_same_seed_same_layout(self) -> None:
        config = BoardConfig(width=6, height=6, num_mines=8)
        first, second = MinesweeperEnv(config), MinesweeperEnv(config)
        first.reset(seed=5)
        second.reset(seed=5)
        assert (
            first.session.all_mine_coordinates()
            == second.session.all_mine_coordinates()
        )

    def test_unseeded_reset_continues_seeded_stream(self) -> None:
        """Episodes after a seeded reset are reproducible too."""
        config = BoardConfig(width=6, height=6, num_mines=8)
        first, second = MinesweeperEnv(config), MinesweeperEnv(config)
        first.reset(seed=3)
        second.reset(seed=3)
        first.reset()
        second.reset()
        assert (
            first.session.all_mine_coordinates()
            == second.session.all_mine_coordinates()
        )


class TestStep:
    """Test rewards and termination."""

    def test_safe_reveal_rewards_one(self, env: MinesweeperEnv) -> None:
        obs, reward, terminated, truncated, info = env.step(1 * 4 + 1)
        assert reward == 1.0
        assert terminated is False
        assert truncated is False
        assert obs[1, 1] == 1
        assert info["revealed"] == 1

    def test_win_rewards_ten(self, env: MinesweeperEnv) -> None:
        _, reward, terminated, _, info = env.step(15)
        assert reward == 10.0
        assert terminated is True
        assert info["game_state"] == GameStatus.WON.name

    def test_mine_penalised(self, env: MinesweeperEnv) -> None:
        _, reward, terminated, _, info = env.step(0)
        assert reward == -10.0
        assert terminated is True
        assert info["game_state"] == "LOST"

    def test_repeat_action_penalised(self, env: MinesweeperEnv) -> None:
        env.step(5)
        _, reward, terminated, _, _ = env.step(5)
        assert reward == pytest.approx(-0.1)
        assert terminated is False

    def test_action_mask_tracks_hidden_cells(self, env: MinesweeperEnv) -> None:
        env.step(5)
        mask = env.get_action_mask()
        assert mask.dtype == bool
        assert mask.sum() == 15
        assert not mask[5]

    def test_render_ansi(self, env: MinesweeperEnv) -> None:
        env.step(5)
        assert env.render().split("\n")[1] == ". 1 . . "
