from member_registry import GuildMemberRegistry
from tests.fakes import FakeRole


def test_exact_username_and_nickname(guild):
    registry = GuildMemberRegistry(guild)

    assert registry.find_by_name("alice").id == 12
    assert registry.find_by_name("Bobby").id == 13


def test_case_insensitive_fallback(guild):
    registry = GuildMemberRegistry(guild)

    assert registry.find_by_name("ALICE").id == 12


def test_mentions_and_ids_resolve_by_id(guild):
    registry = GuildMemberRegistry(guild)

    assert registry.find_by_name("<@13>").id == 13
    assert registry.find_by_name("<@!12>").id == 12
    assert registry.find_by_name("14").id == 14
    assert registry.find_by_name("<@404>") is None


def test_prefix_match_only_when_fuzzy(guild):
    registry = GuildMemberRegistry(guild)

    assert registry.find_by_name("car") is None
    assert registry.find_by_name("car", fuzzy=True).id == 14


def test_ambiguous_names_yield_nothing(guild):
    guild.add_member(20, "alex")
    guild.add_member(21, "Alex")
    guild.add_member(22, "dana", nick="twin")
    guild.add_member(23, "erin", nick="twin")
    registry = GuildMemberRegistry(guild)

    assert registry.find_by_name("alex").id == 20
    assert registry.find_by_name("ALEX") is None
    assert registry.find_by_name("twin") is None
    assert registry.find_by_name("al", fuzzy=True) is None
    assert registry.find_by_name("   ") is None


def test_role_hierarchy(guild):
    registry = GuildMemberRegistry(guild)
    owner, moderator, alice, carol, peer = (guild.get_member(i) for i in (10, 11, 12, 14, 15))

    assert registry.can_interact(moderator, alice)
    assert not registry.can_interact(moderator, peer)
    assert not registry.can_interact(moderator, carol)
    assert not registry.can_interact(carol, owner)
    assert registry.can_interact(owner, carol)
    assert not registry.can_interact(owner, owner)


def test_members_without_roles_sit_at_the_bottom(guild):
    registry = GuildMemberRegistry(guild)
    plain = guild.add_member(30, "plain")
    lowest = guild.add_member(31, "lowest", roles=[FakeRole(200, "Lowest", 0)])

    assert registry.can_interact(guild.get_member(12), plain)
    assert not registry.can_interact(lowest, plain)
