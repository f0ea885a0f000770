"""
Tests for pizza composition (PizzaService).

Covers:
- Placement defaults (REGULAR amount, WHOLE section, lowercase name)
- The coverage rule, applied to sauces and toppings independently
- Known ambiguities of the coverage rule, pinned as currently accepted
- Rejected compositions leave no pizza or placement rows behind
- Pizza lookup and cascading delete
"""

import uuid

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from app.exceptions import (
    InvalidCompositionError,
    NotFoundError,
    ServiceValidationError,
    UnavailableError,
)
from domain.enums import IngredientAmount, IngredientCategory, IngredientSection, PizzaSize
from domain.models import PizzaIngredient
from services.ingredient_service import IngredientService
from services.pizza_service import PizzaService

from test_fixtures import count_pizza_rows, placement, seed_menu


# =============================================================================
# DEFAULTS
# =============================================================================


def test_apply_defaults_fills_amount_and_section():
    result = PizzaService.apply_defaults({"name": "Tomato"})

    assert result.name == "tomato"
    assert result.amount == IngredientAmount.REGULAR
    assert result.section == IngredientSection.WHOLE


def test_apply_defaults_treats_null_as_missing():
    result = PizzaService.apply_defaults({"name": "cheese", "amount": None, "section": None})

    assert result.amount == IngredientAmount.REGULAR
    assert result.section == IngredientSection.WHOLE


def test_apply_defaults_keeps_explicit_values():
    result = PizzaService.apply_defaults(placement("Olives", section="left", amount="extra"))

    assert result.name == "olives"
    assert result.amount == IngredientAmount.EXTRA
    assert result.section == IngredientSection.LEFT


def test_apply_defaults_rejects_unknown_section():
    with pytest.raises(ServiceValidationError):
        PizzaService.apply_defaults({"name": "cheese", "section": "MIDDLE"})


# =============================================================================
# COVERAGE RULE
# =============================================================================


@pytest.mark.parametrize(
    "sections, covered",
    [
        (["WHOLE"], True),
        (["LEFT", "RIGHT"], True),
        (["RIGHT", "LEFT"], True),
        (["LEFT"], False),
        (["RIGHT"], False),
        (["LEFT", "LEFT"], False),
        ([], False),
    ],
)
def test_covers_whole_pizza(sections, covered):
    placements = [placement(f"item{i}", section=s) for i, s in enumerate(sections)]
    assert PizzaService.covers_whole_pizza(placements) is covered


def test_coverage_accepts_whole_mixed_with_halves():
    """Open question: WHOLE plus LEFT/RIGHT is not rejected today"""
    placements = [placement("tomato"), placement("bbq", section="LEFT")]
    assert PizzaService.covers_whole_pizza(placements) is True


def test_coverage_accepts_duplicate_sections():
    """Open question: several placements on the same section are not rejected today"""
    placements = [
        placement("tomato", section="LEFT"),
        placement("bbq", section="LEFT"),
        placement("ranch", section="RIGHT"),
    ]
    assert PizzaService.covers_whole_pizza(placements) is True


def test_check_coverage_error_names_failing_list():
    with pytest.raises(InvalidCompositionError) as exc_info:
        PizzaService.check_coverage(
            [placement("cheese", section="RIGHT")], IngredientCategory.TOPPING
        )

    assert exc_info.value.code == "INVALID_COMPOSITION"
    assert exc_info.value.http_status == 400
    assert exc_info.value.details == {"category": "TOPPING", "sections": ["RIGHT"]}


# =============================================================================
# CREATE
# =============================================================================


def test_create_pizza_with_half_and_half_toppings(db_session: Session):
    ids = seed_menu(db_session)

    pizza = PizzaService.create_pizza(
        db_session,
        PizzaSize.MEDIUM,
        [placement("tomato", section="WHOLE")],
        [placement("cheese", section="LEFT"), placement("olives", section="RIGHT")],
    )

    assert pizza.pizza_id is not None
    assert pizza.size == PizzaSize.MEDIUM
    assert [p.ingredient_id for p in pizza.ingredients] == [
        ids["tomato"],
        ids["cheese"],
        ids["olives"],
    ]
    assert [p.section for p in pizza.ingredients] == [
        IngredientSection.WHOLE,
        IngredientSection.LEFT,
        IngredientSection.RIGHT,
    ]
    assert [p.position for p in pizza.ingredients] == [0, 1, 2]
    assert all(p.amount == IngredientAmount.REGULAR for p in pizza.ingredients)
    assert pizza.ingredients[2].ingredient.name == "olives"


def test_create_pizza_lowercases_names_and_keeps_amounts(db_session: Session):
    seed_menu(db_session)

    pizza = PizzaService.create_pizza(
        db_session,
        PizzaSize.XL,
        [placement("BBQ", amount="LIGHT")],
        [placement("Pepperoni", amount="EXTRA")],
    )

    assert [p.ingredient.name for p in pizza.ingredients] == ["bbq", "pepperoni"]
    assert [p.amount for p in pizza.ingredients] == [
        IngredientAmount.LIGHT,
        IngredientAmount.EXTRA,
    ]


def test_create_pizza_same_topping_twice_on_each_half(db_session: Session):
    """A repeated name is resolved once and placed twice"""
    seed_menu(db_session)

    pizza = PizzaService.create_pizza(
        db_session,
        PizzaSize.SMALL,
        [placement("tomato")],
        [placement("cheese", section="LEFT"), placement("cheese", section="RIGHT")],
    )

    assert len(pizza.ingredients) == 3
    assert pizza.ingredients[1].ingredient_id == pizza.ingredients[2].ingredient_id


def test_create_pizza_accepts_plain_size_and_mappings(db_session: Session):
    seed_menu(db_session)

    pizza = PizzaService.create_pizza(
        db_session, "large", [{"name": "tomato"}], [{"name": "Cheese", "amount": "extra"}]
    )

    assert pizza.size == PizzaSize.LARGE
    assert [p.ingredient.name for p in pizza.ingredients] == ["tomato", "cheese"]
    assert pizza.ingredients[1].amount == IngredientAmount.EXTRA
    assert count_pizza_rows(db_session) == {"pizza": 1, "pizza_ingredient": 2}


def test_unknown_size_rejected_without_writes(db_session: Session):
    seed_menu(db_session)

    with pytest.raises(ServiceValidationError) as exc_info:
        PizzaService.create_pizza(
            db_session, "GIGANTIC", [placement("tomato")], [placement("cheese")]
        )

    assert exc_info.value.details == {"size": "GIGANTIC"}
    assert count_pizza_rows(db_session) == {"pizza": 0, "pizza_ingredient": 0}


def test_uncovered_sauce_rejected_without_writes(db_session: Session):
    seed_menu(db_session)

    with pytest.raises(InvalidCompositionError) as exc_info:
        PizzaService.create_pizza(
            db_session,
            PizzaSize.LARGE,
            [placement("tomato", section="LEFT")],
            [placement("cheese")],
        )

    assert exc_info.value.details["category"] == "SAUCE"
    assert exc_info.value.message == "Pizza sauces and toppings must cover entire pizza"
    assert count_pizza_rows(db_session) == {"pizza": 0, "pizza_ingredient": 0}


def test_uncovered_toppings_rejected(db_session: Session):
    seed_menu(db_session)

    with pytest.raises(InvalidCompositionError) as exc_info:
        PizzaService.create_pizza(
            db_session,
            PizzaSize.LARGE,
            [placement("tomato")],
            [placement("cheese", section="RIGHT")],
        )

    assert exc_info.value.details["category"] == "TOPPING"


def test_coverage_checked_before_catalog_lookup(db_session: Session):
    """An uncovered pizza with unknown names is an invalid composition, not a 404"""
    with pytest.raises(InvalidCompositionError):
        PizzaService.create_pizza(
            db_session, PizzaSize.LARGE, [placement("nope", section="LEFT")], []
        )


def test_unknown_ingredient_rejected_without_writes(db_session: Session):
    seed_menu(db_session)

    with pytest.raises(NotFoundError) as exc_info:
        PizzaService.create_pizza(
            db_session,
            PizzaSize.PERSONAL,
            [placement("tomato")],
            [placement("cheese", section="LEFT"), placement("anchovies", section="RIGHT")],
        )

    assert exc_info.value.details == {"category": "TOPPING", "name": "anchovies"}
    assert count_pizza_rows(db_session) == {"pizza": 0, "pizza_ingredient": 0}


def test_deleted_sauce_cannot_be_ordered(db_session: Session):
    seed_menu(db_session)
    IngredientService.soft_delete(db_session, "ranch", IngredientCategory.SAUCE)

    with pytest.raises(NotFoundError):
        PizzaService.create_pizza(
            db_session, PizzaSize.LARGE, [placement("ranch")], [placement("cheese")]
        )


def test_store_failure_during_create_leaves_no_rows(db_session: Session, monkeypatch):
    seed_menu(db_session)

    def failing_commit():
        raise OperationalError("COMMIT", {}, Exception("server closed the connection"))

    with monkeypatch.context() as m:
        m.setattr(db_session, "commit", failing_commit)
        with pytest.raises(UnavailableError):
            PizzaService.create_pizza(
                db_session, PizzaSize.LARGE, [placement("tomato")], [placement("cheese")]
            )

    assert count_pizza_rows(db_session) == {"pizza": 0, "pizza_ingredient": 0}


# =============================================================================
# GET / DELETE
# =============================================================================


def test_get_pizza_returns_stored_pizza(db_session: Session):
    seed_menu(db_session)
    created = PizzaService.create_pizza(
        db_session, PizzaSize.LARGE, [placement("tomato")], [placement("cheese")]
    )

    fetched = PizzaService.get_pizza(db_session, created.pizza_id)

    assert fetched.pizza_id == created.pizza_id
    assert [p.ingredient.name for p in fetched.ingredients] == ["tomato", "cheese"]


def test_get_unknown_pizza_not_found(db_session: Session):
    with pytest.raises(NotFoundError):
        PizzaService.get_pizza(db_session, uuid.uuid4())


def test_delete_pizza_removes_placements(db_session: Session):
    seed_menu(db_session)
    pizza = PizzaService.create_pizza(
        db_session,
        PizzaSize.LARGE,
        [placement("tomato")],
        [placement("cheese", section="LEFT"), placement("olives", section="RIGHT")],
    )
    pizza_id = pizza.pizza_id

    PizzaService.delete_pizza(db_session, pizza_id)

    with pytest.raises(NotFoundError):
        PizzaService.get_pizza(db_session, pizza_id)
    assert (
        db_session.query(PizzaIngredient)
        .filter(PizzaIngredient.pizza_id == pizza_id)
        .count()
        == 0
    )


def test_delete_unknown_pizza_not_found(db_session: Session):
    with pytest.raises(NotFoundError) as exc_info:
        PizzaService.delete_pizza(db_session, uuid.uuid4())

    assert "pizza_id" in exc_info.value.details


def test_deleting_pizza_keeps_catalog(db_session: Session):
    seed_menu(db_session)
    pizza = PizzaService.create_pizza(
        db_session, PizzaSize.LARGE, [placement("tomato")], [placement("cheese")]
    )
    PizzaService.delete_pizza(db_session, pizza.pizza_id)

    names = [i.name for i in IngredientService.list_active(db_session, IngredientCategory.SAUCE)]
    assert "tomato" in names
