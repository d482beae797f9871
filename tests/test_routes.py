"""Integration tests for routes."""

from xitzin.testing import test_app as running_app

from zorkmate.app import create_app


def test_home_page(client):
    """Home page is accessible without certificate."""
    response = client.get("/")
    assert response.is_success
    assert "Zorkmate" in response.body


def test_help_page(client):
    response = client.get("/help")
    assert response.is_success
    assert "Enter House" in response.body


def test_about_page(client):
    response = client.get("/about")
    assert response.is_success
    assert "Infocom" in response.body


def test_play_requires_cert(client):
    response = client.get("/play")
    assert response.is_certificate_required


def test_play_with_cert(auth_client):
    """The play page shows the opening text and the compass."""
    response = auth_client.get("/play")
    assert response.is_success
    assert "West of House" in response.body
    assert "/go/n" in response.body
    assert "Hidden entrance" in response.body


def test_go_direction(auth_client):
    response = auth_client.get("/go/n")
    assert response.is_success
    assert "> n" in response.body
    assert "# North of House" in response.body


def test_go_unknown_direction(auth_client):
    response = auth_client.get("/go/sideways")
    assert response.is_success
    assert "Unknown direction" in response.body


def test_cmd_input_prompt(auth_client):
    response = auth_client.get("/cmd")
    assert response.is_input_required


def test_cmd_with_input(auth_client):
    """A take command is echoed and the item shows up as carried."""
    response = auth_client.get_input("/cmd", "take lamp")
    assert response.is_success
    assert "> take lamp" in response.body
    assert "Taken." in response.body
    assert "* lamp" in response.body


def test_inventory_route(auth_client):
    response = auth_client.get("/inventory")
    assert response.is_success
    assert "* lantern" in response.body
    assert "* sword" in response.body


def test_look_route(auth_client):
    response = auth_client.get("/look")
    assert response.is_success
    assert "> look" in response.body


def test_macros_page(auth_client):
    response = auth_client.get("/macros")
    assert response.is_success
    assert "/macro/enter_house" in response.body


def test_run_macro(auth_client):
    response = auth_client.get("/macro/enter_house")
    assert response.is_success
    assert "> open window" in response.body
    assert "> enter" in response.body


def test_unknown_macro(auth_client):
    response = auth_client.get("/macro/win_game")
    assert response.is_success
    assert "Unknown macro" in response.body


def test_travel_page(auth_client):
    response = auth_client.get("/travel")
    assert response.is_success
    assert "/travel/kitchen" in response.body
    assert "/travel/west-of-house" not in response.body


def test_travel_to(auth_client):
    response = auth_client.get("/travel/kitchen")
    assert response.is_success
    assert "> open window" in response.body


def test_travel_unknown(auth_client):
    response = auth_client.get("/travel/narnia")
    assert response.is_success
    assert "Unknown destination" in response.body


def test_walkthrough(auth_client):
    response = auth_client.get("/walkthrough")
    assert response.is_success
    assert "Progress: 0 / 37" in response.body


def test_walkthrough_toggle(auth_client):
    response = auth_client.get("/walkthrough/p1_lamp")
    assert response.is_success
    assert "Progress: 1 / 37" in response.body
    assert "[x] Take the Brass Lantern" in response.body

    response = auth_client.get("/walkthrough/p1_lamp")
    assert "Progress: 0 / 37" in response.body


def test_walkthrough_unknown_task(auth_client):
    response = auth_client.get("/walkthrough/p9_nothing")
    assert response.is_success
    assert "Unknown task" in response.body


def test_new_game_prompt(auth_client):
    response = auth_client.get("/new")
    assert response.is_input_required


def test_new_game_confirmed(auth_client):
    auth_client.get("/go/n")
    response = auth_client.get_input("/new", "YES")
    assert response.is_success
    assert "A new adventure begins!" in response.body
    assert "# West of House" in response.body


def test_control_pad_links(auth_client):
    response = auth_client.get("/play")
    assert "/do/take-all" in response.body
    assert "/do/wait" in response.body


def test_control_pad_action(auth_client):
    response = auth_client.get("/do/take-all")
    assert response.is_success
    assert "> take all" in response.body


def test_unknown_action(auth_client):
    response = auth_client.get("/do/fly")
    assert response.is_success
    assert "Unknown action" in response.body


def test_examine_carried_item(auth_client):
    response = auth_client.get_input("/cmd", "take lamp")
    assert "/examine/lamp" in response.body

    response = auth_client.get("/examine/lamp")
    assert response.is_success
    assert "> examine lamp" in response.body


def test_examine_item_not_carried(auth_client):
    response = auth_client.get("/examine/sword")
    assert response.is_success
    assert "You don't seem to be carrying: sword" in response.body
    assert "> examine sword" not in response.body


def test_help_lists_tips(client):
    response = client.get("/help")
    assert "## Tips" in response.body
    assert "grue" in response.body


def test_macro_after_game_over(auth_client):
    auth_client.get_input("/cmd", "quit")
    response = auth_client.get("/macro/enter_house")
    assert response.is_success
    assert "The game is over" in response.body
    assert "> open window" not in response.body


def test_log_cannot_close_preformatted_block(test_config, scripted):
    replies = {"xyzzy": '```\nA hollow voice says "Fool."\n'}
    app = create_app(test_config, interpreter_factory=lambda: scripted(replies=replies))
    with running_app(app) as client:
        response = client.with_certificate("fp-xyzzy").get_input("/cmd", "xyzzy")
    assert response.is_success
    assert "\n ```\n" in response.body
    toggles = [line for line in response.body.splitlines() if line.startswith("```")]
    assert len(toggles) == 2


def test_shutdown_closes_sessions(app):
    with running_app(app) as client:
        client.with_certificate("fp-shutdown").get("/play")
        game = app.state.sessions.get("fp-shutdown")
    assert len(app.state.sessions) == 0
    assert game.is_finished
    assert game.orchestrator.interpreter.closed
