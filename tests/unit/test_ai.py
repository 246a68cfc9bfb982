from gridwar.engine.ai import act_with_unit, choose_destination, choose_target
from gridwar.missions.demo import default_scenario
from gridwar.models.api import EndTurnAction
from gridwar.models.enums import ActionLogResult, Faction, GameStatus, UnitType
from tests.utils.builders import E, P, building, unit

AI = [Faction.ENEMY]


def test_adjacent_enemy_is_attacked(engine, make_session):
    sess = make_session(
        ["....."],
        [unit(UnitType.SOLDIER, P, 0, 0, "p"), unit(UnitType.SOLDIER, E, 1, 0, "e")],
        ai_factions=AI,
    )
    _, sess = engine.process_action(sess, EndTurnAction())
    g = sess.game
    assert g.units["p"].hp == 7
    assert g.units["e"].pos == (1, 0)
    # control is back with the player on the next turn
    assert g.turn.active_faction == Faction.PLAYER
    assert g.turn.turn_number == 2


def test_advances_toward_a_distant_target(engine, make_session):
    sess = make_session(
        ["......."],
        [unit(UnitType.SOLDIER, P, 0, 0, "p"), unit(UnitType.SOLDIER, E, 6, 0, "e")],
        ai_factions=AI,
    )
    _, sess = engine.process_action(sess, EndTurnAction())
    assert sess.game.units["e"].pos == (3, 0)
    assert sess.game.units["p"].hp == 10


def test_moves_into_range_then_strikes(engine, make_session):
    sess = make_session(
        ["......."],
        [unit(UnitType.SOLDIER, P, 0, 0, "p"), unit(UnitType.SOLDIER, E, 4, 0, "e")],
        ai_factions=AI,
    )
    _, sess = engine.process_action(sess, EndTurnAction())
    assert sess.game.units["e"].pos == (1, 0)
    assert sess.game.units["p"].hp == 7


def test_archer_keeps_its_distance(engine, make_session):
    sess = make_session(
        ["........"],
        [unit(UnitType.SOLDIER, P, 0, 0, "p"), unit(UnitType.ARCHER, E, 5, 0, "a")],
        ai_factions=AI,
    )
    g = sess.game
    a = g.units["a"]
    t = choose_target(g, a)
    assert t.unit_id == "p"
    # distance 2 lets it shoot; closer would not
    assert choose_destination(g, a, t) == (2, 0)


def test_nearby_building_is_captured(engine, make_session):
    sess = make_session(
        [".......V"],
        [unit(UnitType.SOLDIER, P, 0, 0, "p"), unit(UnitType.SOLDIER, E, 6, 0, "e")],
        [building(7, 0, bid="v")],
        ai_factions=AI,
    )
    _, sess = engine.process_action(sess, EndTurnAction())
    b = sess.game.buildings["v"]
    assert b.capture_hp == 8
    assert b.capturing_faction == Faction.ENEMY


def test_ties_go_to_the_first_enemy_in_roster_order(make_session):
    sess = make_session(
        ["....."],
        [
            unit(UnitType.SOLDIER, P, 0, 0, "first"),
            unit(UnitType.SOLDIER, P, 4, 0, "second"),
            unit(UnitType.SOLDIER, E, 2, 0, "e"),
        ],
        ai_factions=AI,
    )
    g = sess.game
    assert choose_target(g, g.units["e"]).unit_id == "first"


def test_healer_patches_up_before_anything_else(engine, make_session):
    sess = make_session(
        ["........"],
        [
            unit(UnitType.SOLDIER, P, 0, 0, "p"),
            unit(UnitType.MEDIC, E, 6, 0, "medic"),
            unit(UnitType.SOLDIER, E, 7, 0, "hurt", hp=4),
        ],
        ai_factions=AI,
    )
    _, sess = engine.process_action(sess, EndTurnAction())
    assert sess.game.units["hurt"].hp == 8


def test_no_target_means_no_action(engine, make_session):
    sess = make_session(
        ["....."],
        [unit(UnitType.SOLDIER, P, 0, 0, "p"), unit(UnitType.MEDIC, E, 4, 0, "m")],
    )
    g = sess.game
    # nothing to chase: no enemies left and medics cannot capture
    del g.units["p"]
    g.board.tile((0, 0)).occupant_id = None
    g.turn.active_faction = Faction.ENEMY
    m = g.units["m"]
    assert choose_target(g, m) is None
    after = act_with_unit(engine, sess, "m")
    assert after.game.units["m"].pos == (4, 0)
    assert not after.game.units["m"].attacked


def test_demo_ai_never_proposes_illegal_actions(engine, events):
    sess = engine.new_session(default_scenario(), sid="demo")
    for _ in range(12):
        if sess.game.status != GameStatus.IN_PROGRESS:
            break
        ev, sess = engine.process_action(sess, EndTurnAction())
        assert ev.legal
    bad = [e for e in events if e.result != ActionLogResult.APPLIED]
    assert bad == []
    assert any(e.actor_unit_id and e.actor_unit_id.startswith("e.") for e in events)
