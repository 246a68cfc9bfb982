from gridwar.models.api import CaptureAction, EndTurnAction, MoveAction
from gridwar.models.enums import Faction, UnitType
from tests.utils.builders import E, P, building, unit


def _next_round(engine, sess):
    # PLAYER -> ENEMY -> PLAYER, both human-controlled
    for _ in range(2):
        ev, sess = engine.process_action(sess, EndTurnAction())
        assert ev.legal
    return sess


def test_five_uncontested_captures_flip_a_village(engine, make_session):
    sess = make_session(
        ["V......"],
        [unit(UnitType.SOLDIER, P, 0, 0, "p"), unit(UnitType.SOLDIER, E, 6, 0, "e")],
        [building(0, 0, bid="village")],
    )
    act = CaptureAction(unit_id="p", building_id="village")
    for i in range(4):
        ev, sess = engine.process_action(sess, act)
        assert ev.legal, ev.explanation
        b = sess.game.buildings["village"]
        assert b.owner == Faction.NEUTRAL
        assert b.capture_hp == 10 - 2 * (i + 1)
        sess = _next_round(engine, sess)

    ev, sess = engine.process_action(sess, act)
    assert ev.legal and "would_capture=yes" in ev.explanation
    g = sess.game
    b = g.buildings["village"]
    assert b.owner == Faction.PLAYER
    assert b.capture_hp == b.max_capture_hp
    assert b.capturing_faction is None
    assert g.gold[Faction.PLAYER] == 100  # capture bonus

    # income arrives at the next PLAYER turn start
    sess = _next_round(engine, sess)
    assert sess.game.gold[Faction.PLAYER] == 150


def test_capture_spends_the_units_turn(engine, make_session):
    sess = make_session(
        ["V......"],
        [unit(UnitType.SOLDIER, P, 0, 0, "p"), unit(UnitType.SOLDIER, E, 6, 0, "e")],
        [building(0, 0, bid="village")],
    )
    _, sess = engine.process_action(sess, CaptureAction(unit_id="p", building_id="village"))
    u = sess.game.units["p"]
    assert u.moved and u.attacked
    ev = engine.evaluate(sess, CaptureAction(unit_id="p", building_id="village"))
    assert not ev.legal
    ev = engine.evaluate(sess, MoveAction(unit_id="p", to=(1, 0)))
    assert not ev.legal


def test_adjacent_capture_and_reach_zero(engine, make_session):
    units = [unit(UnitType.SOLDIER, P, 1, 0, "p"), unit(UnitType.SOLDIER, E, 6, 0, "e")]
    sess = make_session(["V......"], units, [building(0, 0, bid="v")])
    assert engine.evaluate(sess, CaptureAction(unit_id="p", building_id="v")).legal

    sess = make_session(["V......"], units, [building(0, 0, bid="v")], capture_reach=0)
    ev = engine.evaluate(sess, CaptureAction(unit_id="p", building_id="v"))
    assert not ev.legal and ev.explanation == "building out of reach"


def test_capture_refusals(engine, make_session):
    sess = make_session(
        ["V.B...V"],
        [
            unit(UnitType.MEDIC, P, 0, 0, "medic"),
            unit(UnitType.SOLDIER, P, 2, 0, "p"),
            unit(UnitType.SOLDIER, E, 5, 0, "e"),
        ],
        [building(0, 0, bid="west"), building(2, 0, P, "base"), building(6, 0, bid="east")],
    )
    cases = {
        ("medic", "west"): "unit cannot capture",
        ("p", "base"): "building already owned",
        ("p", "east"): "building out of reach",
        ("e", "east"): "not this unit's turn",
    }
    for (uid, bid), why in cases.items():
        ev = engine.evaluate(sess, CaptureAction(unit_id=uid, building_id=bid))
        assert not ev.legal
        assert ev.explanation == why


def test_other_faction_resets_progress(engine, make_session):
    sess = make_session(
        [".V."],
        [unit(UnitType.SOLDIER, P, 0, 0, "p"), unit(UnitType.SOLDIER, E, 2, 0, "e")],
        [building(1, 0, bid="v")],
    )
    _, sess = engine.process_action(sess, CaptureAction(unit_id="p", building_id="v"))
    assert sess.game.buildings["v"].capture_hp == 8

    _, sess = engine.process_action(sess, EndTurnAction())
    _, sess = engine.process_action(sess, CaptureAction(unit_id="e", building_id="v"))
    b = sess.game.buildings["v"]
    assert b.capture_hp == 8
    assert b.capturing_faction == Faction.ENEMY

    _, sess = engine.process_action(sess, EndTurnAction())
    _, sess = engine.process_action(sess, CaptureAction(unit_id="p", building_id="v"))
    b = sess.game.buildings["v"]
    assert b.capture_hp == 8
    assert b.capturing_faction == Faction.PLAYER


def test_income_is_paid_at_turn_start(engine, make_session):
    sess = make_session(
        ["B....B"],
        [unit(UnitType.SOLDIER, P, 1, 0, "p"), unit(UnitType.SOLDIER, E, 4, 0, "e")],
        [building(0, 0, P, "pb"), building(5, 0, E, "eb")],
        gold={Faction.PLAYER: 10},
    )
    g = sess.game
    assert g.gold[Faction.PLAYER] == 110
    assert g.gold[Faction.ENEMY] == 0
    _, sess = engine.process_action(sess, EndTurnAction())
    assert sess.game.gold[Faction.ENEMY] == 100
