import pytest

from src.game.tangram import Phase
from src.interaction import InteractionTranslator

ORIGIN = (16, 100)


@pytest.fixture
def translator(game):
    return InteractionTranslator(game, ORIGIN)


@pytest.fixture
def playing(playing_game):
    return InteractionTranslator(playing_game, ORIGIN)


def screen(x, y):
    return x + ORIGIN[0], y + ORIGIN[1]


def test_board_space_subtracts_origin(translator):
    assert translator.board_space((16, 100)) == (0, 0)
    assert translator.board_space((66, 90)) == (50, -10)


def test_full_drag_gesture(playing):
    game = playing.game
    playing.pointer_down("B", screen(110, 120))
    playing.pointer_move(screen(215, 170))
    assert game.get_piece("B").position == (200, 150)
    playing.pointer_up()
    assert game.drag is None


def test_drag_past_board_edge_is_clamped(playing):
    game = playing.game
    game.get_piece("C").position = (0, 0)
    playing.pointer_down("C", screen(0, 0))
    playing.pointer_move(screen(437, -12))
    playing.pointer_up()
    assert game.get_piece("C").position == (350, 0)


def test_pointer_leave_ends_drag(playing):
    playing.pointer_down("A", screen(100, 100))
    playing.pointer_leave()
    assert playing.game.drag is None


def test_pointer_events_without_drag_are_ignored(playing):
    before = playing.game.get_state()
    playing.pointer_move(screen(300, 300))
    playing.pointer_up()
    playing.pointer_leave()
    assert playing.game.get_state() == before


def test_pointer_down_ignored_when_not_playing(translator):
    translator.pointer_down("A", screen(10, 10))
    assert translator.game.drag is None
    assert not translator.game.get_piece("A").selected


def test_secondary_action_flips_and_prevents_default(playing):
    assert playing.secondary_action("D") is True
    d = playing.game.get_piece("D")
    assert d.flipped is True
    assert d.selected


def test_secondary_action_prevents_default_even_when_idle(translator):
    assert translator.secondary_action("D") is True
    assert translator.game.get_piece("D").flipped is False


@pytest.mark.parametrize(
    "key, rotation, flipped",
    [("r", 90, False), ("f", 0, True), ("x", 0, False), ("R", 0, False)],
)
def test_key_bindings(playing, key, rotation, flipped):
    playing.key_press("E", key)
    e = playing.game.get_piece("E")
    assert e.rotation == rotation
    assert e.flipped is flipped


def test_key_without_focus_is_ignored(playing):
    before = playing.game.get_state()
    playing.key_press(None, "r")
    assert playing.game.get_state() == before


def test_keys_ignored_when_not_playing(translator):
    translator.key_press("E", "r")
    translator.key_press("E", "f")
    e = translator.game.get_piece("E")
    assert e.rotation == 0 and e.flipped is False


def test_rotate_control_targets_selected_piece(playing):
    playing.rotate_control()  # nothing selected yet
    assert all(p.rotation == 0 for p in playing.game.pieces)

    playing.pointer_down("G", screen(100, 100))
    playing.pointer_up()
    playing.rotate_control()
    assert playing.game.get_piece("G").rotation == 90


def test_rotate_control_ignored_after_answer(playing):
    playing.pointer_down("G", screen(100, 100))
    playing.pointer_up()
    playing.answer_control()
    playing.rotate_control()
    assert playing.game.get_piece("G").rotation == 0


def test_start_and_answer_always_enabled(translator):
    translator.answer_control()
    assert translator.game.phase is Phase.SOLVED
    translator.start_control()
    assert translator.game.phase is Phase.PLAYING
    translator.start_control()
    assert translator.game.phase is Phase.PLAYING


def test_hint_press_and_release(translator):
    translator.hint_pressed()
    assert translator.game.hint_visible
    translator.hint_released()
    assert not translator.game.hint_visible
    translator.hint_pressed()
    translator.hint_leave()
    assert not translator.game.hint_visible


def test_solving_through_translator(playing, notifications, solve_all_but):
    game = playing.game
    solve_all_but(game, "F")
    game.get_piece("F").position = (0, 0)
    game.get_piece("F").flipped = True
    playing.secondary_action("F")
    assert game.phase is Phase.SOLVED
    assert notifications.calls == [(1300, 0)]
