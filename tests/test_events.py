import pytest

from ledgerlab.events import (
    ACTION_ADMIN,
    ACTION_AUDIT,
    ACTION_CONFIG_UPDATE,
    ACTION_TRANSFER,
    CONTRACT_NS,
    AdminActionEventData,
    AuditTrailEventData,
    ConfigUpdateEventData,
    EventsContract,
    TransferEventData,
)
from ledgerlab.host import Env, HostError, Ledger


@pytest.fixture
def env():
    return Env(Ledger(timestamp=1_700_000_000, sequence=77))


@pytest.fixture
def client(env):
    return env.contract(env.register(EventsContract))


def test_naming_convention_namespace_and_action_slots_are_stable(env, client):
    a1 = env.generate_address()
    a2 = env.generate_address()
    client.transfer(a1, a2, 10, 1)
    client.update_config("fee", 1, 2)
    client.admin_action(a1, "pause")
    client.audit_trail(a2, "resume", "ok")
    assert len(env.events) == 4
    expected = [ACTION_TRANSFER, ACTION_CONFIG_UPDATE, ACTION_ADMIN, ACTION_AUDIT]
    for event, action in zip(env.events, expected):
        assert event.topics[0] == CONTRACT_NS
        assert event.topics[1] == action


def test_constant_spellings(env, client):
    a1 = env.generate_address()
    a2 = env.generate_address()
    client.transfer(a1, a2, 10, 1)
    client.update_config("fee", 1, 2)
    client.admin_action(a1, "pause")
    client.audit_trail(a2, "resume", "ok")
    assert [event.topics[:2] for event in env.events] == [
        ("events", "transfer"),
        ("events", "cfg_upd"),
        ("events", "admin"),
        ("events", "audit"),
    ]


def test_events_record_emitting_contract(env, client):
    client.emit_simple(1)
    assert env.events[0].contract == client.address


def test_transfer_emits_one_event(env, client):
    client.transfer(env.generate_address(), env.generate_address(), 1000, 0)
    assert len(env.events) == 1


def test_transfer_event_has_four_topics(env, client):
    client.transfer(env.generate_address(), env.generate_address(), 500, 42)
    assert len(env.events[0].topics) == 4


def test_transfer_topic_namespace_and_action(env, client):
    client.transfer(env.generate_address(), env.generate_address(), 1, 0)
    topics = env.events[0].topics
    assert topics[0] == "events"
    assert topics[1] == "transfer"


def test_transfer_indexed_addresses_in_topics(env, client):
    sender = env.generate_address()
    recipient = env.generate_address()
    client.transfer(sender, recipient, 999, 0)
    topics = env.events[0].topics
    assert topics[2] == sender
    assert topics[3] == recipient


def test_transfer_structured_data_payload(env, client):
    client.transfer(env.generate_address(), env.generate_address(), 12_345, 99)
    assert env.events[0].data == TransferEventData(amount=12_345, memo=99)


def test_transfer_rejects_negative_memo(env, client):
    with pytest.raises(ValueError):
        client.transfer(env.generate_address(), env.generate_address(), 1, -1)
    assert env.events == []


def test_config_update_emits_one_event(env, client):
    client.update_config("max_sup", 100, 200)
    assert len(env.events) == 1


def test_config_update_event_has_three_topics(env, client):
    client.update_config("fee", 5, 10)
    assert len(env.events[0].topics) == 3


def test_config_update_topic_namespace_and_action(env, client):
    client.update_config("fee", 5, 10)
    topics = env.events[0].topics
    assert topics[0] == "events"
    assert topics[1] == "cfg_upd"


def test_config_update_indexed_key_in_topic(env, client):
    client.update_config("max_sup", 50, 100)
    assert env.events[0].topics[2] == "max_sup"


def test_config_update_structured_data_payload(env, client):
    client.update_config("rate", 10, 20)
    payload = env.events[0].data
    assert payload == ConfigUpdateEventData(old_value=10, new_value=20)
    assert (payload.old_value, payload.new_value) == (10, 20)


def test_config_update_rejects_bad_symbol(client):
    with pytest.raises(ValueError):
        client.update_config("not a symbol", 1, 2)


def test_event_emission_exists(env, client):
    client.emit_simple(100)
    assert len(env.events) > 0


def test_event_count_single(env, client):
    client.emit_simple(42)
    assert len(env.events) == 1


def test_event_count_multiple(env, client):
    client.emit_multiple(3)
    assert len(env.events) == 3
    assert [e.topics for e in env.events] == [("multi", 0), ("multi", 1), ("multi", 2)]
    assert [e.data for e in env.events] == [0, 1, 2]


def test_topic_structure_simple(env, client):
    client.emit_simple(99)
    assert env.events[0].topics == ("simple",)


def test_topic_structure_tagged(env, client):
    client.emit_tagged("mytag", 50)
    topics = env.events[0].topics
    assert len(topics) == 2
    assert topics[0] == "tagged"
    assert topics[1] == "mytag"


def test_payload_values(env, client):
    client.emit_simple(12345)
    assert env.events[0].data == 12345


def test_zero_events_on_empty_emit(env, client):
    client.emit_multiple(0)
    assert len(env.events) == 0


def test_emit_transfer_topic_layout(env, client):
    sender = env.generate_address()
    recipient = env.generate_address()
    client.emit_transfer(sender, recipient, 500)
    assert len(env.events) == 1
    event = env.events[0]
    assert event.topics == ("transfer", sender, recipient)
    assert event.data == 500


def test_emit_transfer_independent_senders_queryable(env, client):
    alice = env.generate_address()
    bob = env.generate_address()
    carol = env.generate_address()
    client.emit_transfer(alice, carol, 100)
    client.emit_transfer(bob, carol, 200)
    assert len(env.events) == 2
    assert all(e.topics[0] == "transfer" for e in env.events)
    assert env.events[0].topics[1] != env.events[1].topics[1]
    from_alice = [e for e in env.events if e.topics[1] == alice]
    assert len(from_alice) == 1
    assert from_alice[0].data == 100


def test_emit_namespaced_three_topic_hierarchy(env, client):
    client.emit_namespaced("defi", "swap", "pool1", 1000)
    assert len(env.events) == 1
    event = env.events[0]
    assert len(event.topics) == 3
    assert event.topics == ("defi", "swap", "pool1")
    assert event.data == 1000


def test_emit_status_change_four_topics(env, client):
    client.emit_status_change("order42", "pending", "filled")
    assert len(env.events) == 1
    event = env.events[0]
    assert len(event.topics) == 4
    assert event.topics == ("status", "order42", "pending", "filled")
    assert event.data == env.ledger.sequence == 77


def test_admin_action_emits_one_event(env, client):
    client.admin_action(env.generate_address(), "pause")
    assert len(env.events) == 1


def test_admin_action_event_has_three_topics(env, client):
    client.admin_action(env.generate_address(), "pause")
    assert len(env.events[0].topics) == 3


def test_admin_action_topic_namespace_and_category(env, client):
    client.admin_action(env.generate_address(), "upgrade")
    topics = env.events[0].topics
    assert topics[0] == "events"
    assert topics[1] == "admin"


def test_admin_action_indexed_admin_address(env, client):
    admin = env.generate_address()
    client.admin_action(admin, "pause")
    assert env.events[0].topics[2] == admin


def test_admin_action_structured_data_payload(env, client):
    client.admin_action(env.generate_address(), "pause")
    payload = env.events[0].data
    assert payload == AdminActionEventData(action="pause", timestamp=1_700_000_000)


def test_audit_trail_emits_one_event(env, client):
    client.audit_trail(env.generate_address(), "delete", "rec_42")
    assert len(env.events) == 1


def test_audit_trail_event_has_four_topics(env, client):
    client.audit_trail(env.generate_address(), "create", "item_1")
    assert len(env.events[0].topics) == 4


def test_audit_trail_topic_namespace_and_category(env, client):
    client.audit_trail(env.generate_address(), "update", "cfg_x")
    topics = env.events[0].topics
    assert topics[0] == "events"
    assert topics[1] == "audit"


def test_audit_trail_indexed_actor_and_action(env, client):
    actor = env.generate_address()
    client.audit_trail(actor, "delete", "rec_7")
    topics = env.events[0].topics
    assert topics[2] == actor
    assert topics[3] == "delete"


def test_audit_trail_structured_data_payload(env, client):
    client.audit_trail(env.generate_address(), "create", "new_usr")
    payload = env.events[0].data
    assert payload == AuditTrailEventData(
        details="new_usr", timestamp=env.ledger.timestamp, sequence=env.ledger.sequence
    )


def test_publish_from_unregistered_contract_fails(env):
    with pytest.raises(HostError):
        env.publish(env.generate_address(), ("simple",), 1)