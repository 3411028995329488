"""Tests for modifier providers and aggregation."""

from rpgstats.stats import (
    ModifierContribution,
    ModifierProvider,
    Stat,
    StatModifiers,
    aggregate_modifiers,
)


class BuffGenerator:
    """Provider that yields its modifiers lazily."""

    def get_additive_modifiers(self, stat):
        if stat is Stat.DAMAGE:
            yield 2
            yield 3

    def get_percentage_modifiers(self, stat):
        if stat is Stat.DAMAGE:
            yield 10


class TestAggregateModifiers:
    """Tests for summing provider contributions."""

    def test_no_providers(self):
        """Without providers both totals are zero."""
        assert aggregate_modifiers(Stat.HEALTH, []) == ModifierContribution(0.0, 0.0)

    def test_single_provider(self):
        """A provider's values are summed per kind."""
        helmet = StatModifiers(
            name="helmet",
            additive={Stat.HEALTH: [10, 5]},
            percentage={Stat.HEALTH: [20]},
        )

        result = aggregate_modifiers(Stat.HEALTH, [helmet])

        assert result.additive == 15
        assert result.percentage == 20

    def test_multiple_providers(self):
        """Contributions from every provider are added together."""
        sword = StatModifiers(name="sword", additive={Stat.DAMAGE: [5]})
        ring = StatModifiers(name="ring", percentage={Stat.DAMAGE: [25, 25]})

        result = aggregate_modifiers(Stat.DAMAGE, [sword, ring, BuffGenerator()])

        assert result.additive == 10
        assert result.percentage == 60

    def test_other_stats_ignored(self):
        """Only modifiers for the queried stat count."""
        sword = StatModifiers(name="sword", additive={Stat.DAMAGE: [5]})
        assert aggregate_modifiers(Stat.DEFENCE, [sword]) == ModifierContribution()

    def test_negative_modifiers(self):
        """Debuffs contribute negative values."""
        curse = StatModifiers(
            name="curse",
            additive={Stat.DEFENCE: [-3]},
            percentage={Stat.DEFENCE: [-50]},
        )

        result = aggregate_modifiers(Stat.DEFENCE, [curse])

        assert result == ModifierContribution(additive=-3, percentage=-50)


class TestStatModifiers:
    """Tests for the list-backed provider."""

    def test_add_helpers(self):
        """add_additive and add_percentage append values."""
        buff = StatModifiers(name="rage")
        buff.add_additive(Stat.DAMAGE, 4)
        buff.add_additive(Stat.DAMAGE, 1)
        buff.add_percentage(Stat.DAMAGE, 15)

        assert list(buff.get_additive_modifiers(Stat.DAMAGE)) == [4, 1]
        assert list(buff.get_percentage_modifiers(Stat.DAMAGE)) == [15]

    def test_satisfies_protocol(self):
        """Both providers satisfy the ModifierProvider protocol."""
        assert isinstance(StatModifiers(), ModifierProvider)
        assert isinstance(BuffGenerator(), ModifierProvider)

    def test_unrelated_object_is_not_provider(self):
        """Objects without the methods are not providers."""
        assert not isinstance(object(), ModifierProvider)
