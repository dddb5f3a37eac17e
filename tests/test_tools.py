import io

import numpy as np

from roombeyond import core, presenter, sim, validate
from . import look_at, standing_at

def test_presenter_shows_dialog(game):
    out = io.StringIO()
    text_presenter = presenter.TextPresenter(out)
    text_presenter.attach(game)

    look_at(game, "phone")
    game.interact()
    game.end_dialog()

    lines = out.getvalue().splitlines()
    assert lines[0] == "> Phone"
    assert lines[1] == "* Phone (phone)"
    assert lines[2].startswith("Inner Voice: ")
    assert lines[3].startswith("  [0] ")
    assert "discovered phone (1)" in lines
    assert lines[-1] == "---"

    text_presenter.detach(game)
    look_at(game, "laptop")
    assert out.getvalue().splitlines() == lines

def test_presenter_verbose(game):
    out = io.StringIO()
    presenter.TextPresenter(out, verbose=True).attach(game)
    look_at(game, "photo")
    game.interact()
    lines = out.getvalue().splitlines()
    assert "near Photo" in lines
    assert "flag photo_examined = True" in lines

def test_driver_commands(game):
    out = io.StringIO()
    presenter.TextPresenter(out).attach(game)
    driver = sim.Driver(game, out)

    x, y, z = standing_at("phone")
    assert driver.execute(f'pos {x} {y} {z}')
    assert driver.execute("look 0 0")
    assert game.focus.get_focused() == "phone"

    driver.execute("interact")
    assert game.dialogs.is_active()
    driver.execute("save")
    driver.execute("choose 0")
    assert game.dialogs.current_node().node_id == "phone_connected"
    driver.execute("choose 9")
    driver.execute("load")
    assert game.dialogs.current_node().node_id == "phone_start"
    driver.execute("end")
    assert not game.dialogs.is_active()

    driver.execute("act")
    driver.execute("status")
    driver.execute("pos a b c")
    driver.execute("look 0 0 -inf")
    assert np.isfinite(driver.camera_forward).all()
    driver.execute("tick")
    driver.execute("dance")
    driver.execute("# just a comment")
    assert not driver.execute("quit")

    text = out.getvalue()
    assert "you can't say that" in text
    assert "not yet" in text
    assert "act 1, discovered 1: phone" in text
    assert "bad arguments for pos" in text
    assert "bad arguments for look" in text
    assert f'roombeyond {core.roombeyond_version()}' in text
    assert "unknown command dance" in text

def test_driver_run_stops_at_quit(game):
    out = io.StringIO()
    driver = sim.Driver(game, out)
    x, y, z = standing_at("photo")
    driver.run(io.StringIO(f'pos {x} {y} {z}\ninteract\nquit\ninteract\n'))
    assert game.story.discovered_objects == ["photo"]

def test_shipped_content_validates():
    assert [x for x in validate.validate_all() if x.error] == []
