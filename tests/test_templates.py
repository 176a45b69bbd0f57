from sipplanner.core.schemas import GoalTemplate
from sipplanner.utils.sip_models import Goal
from sipplanner.utils.templates import TemplateCatalog


def test_builtin_templates():
    cat = TemplateCatalog()
    ids = [t.template_id for t in cat.all()]
    assert len(ids) == 8
    assert "child-education" in ids and "emergency-fund" in ids

    r = cat.get("retirement")
    assert r.current_price == 10000000
    assert r.years == 25
    assert cat.get("nope") is None


def test_create_goal_from_template():
    cat = TemplateCatalog()
    g = cat.create_goal("house-purchase")
    assert isinstance(g, Goal)
    assert g.name == "Buy a House"
    assert (g.current_price, g.inflation_rate, g.years, g.expected_return) == (3000000, 6, 10, 12)
    assert g.stepup_rate == 0
    assert cat.create_goal("nope") is None


def test_add_custom_template():
    cat = TemplateCatalog()
    custom = {"id": "gadget", "name": "New Laptop", "currentPrice": 150000, "inflationRate": 4, "years": 2, "expectedReturn": 7}
    assert cat.add_custom(custom) is True
    assert cat.get("gadget").name == "New Laptop"
    assert len(cat.all()) == 9

    assert cat.add_custom(custom) is False
    assert cat.add_custom({"id": "x"}) is False
    assert cat.add_custom({"name": "No id"}) is False
    assert cat.add_custom({"id": "bad", "name": "Bad", "currentPrice": "abc"}) is False


def test_add_custom_accepts_model_and_catalogs_are_independent():
    cat = TemplateCatalog()
    t = GoalTemplate(template_id="bike", name="Bike", current_price=90000, inflation_rate=5, years=1, expected_return=6)
    assert cat.add_custom(t) is True
    assert TemplateCatalog().get("bike") is None


def test_all_returns_a_copy():
    cat = TemplateCatalog()
    cat.all().clear()
    assert len(cat.all()) == 8
