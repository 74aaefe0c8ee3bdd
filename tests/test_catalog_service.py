"""Tests for CatalogService and ProfessionService."""

from decimal import Decimal

import pytest

from salonledger.domain.entities import UNCATEGORIZED, MemberRole
from salonledger.domain.errors import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)


@pytest.fixture
def nails(catalog_service, sample_workspace):
    return catalog_service.add_category(sample_workspace.id, "Nails")


@pytest.fixture
def gel_polish(catalog_service, sample_workspace, nails):
    return catalog_service.add_service(
        sample_workspace.id, "Gel polish", Decimal("35"), duration=60, category_id=nails
    )


def test_add_and_list_categories(catalog_service, sample_workspace, nails):
    catalog_service.add_category(sample_workspace.id, "Brows")

    names = [c.name for c in catalog_service.list_categories(sample_workspace.id)]
    assert names == ["Brows", "Nails"]


def test_duplicate_category_rejected(catalog_service, sample_workspace, nails):
    with pytest.raises(ConflictError):
        catalog_service.add_category(sample_workspace.id, "nails")


def test_add_service_with_category(catalog_service, gel_polish):
    item = catalog_service.get_service(gel_polish)

    assert item.name == "Gel polish"
    assert item.price == Decimal("35")
    assert item.duration == 60
    assert item.category_name == "Nails"
    assert item.category_label == "Nails"


def test_service_without_category_is_uncategorized(catalog_service, sample_workspace):
    service_id = catalog_service.add_service(sample_workspace.id, "Consultation", Decimal("0"))

    item = catalog_service.get_service(service_id)
    assert item.category_id is None
    assert item.duration is None
    assert item.category_label == UNCATEGORIZED


@pytest.mark.parametrize(
    "kwargs, error",
    [
        ({"name": " ", "price": Decimal("10")}, ValidationError),
        ({"name": "Wax", "price": Decimal("-1")}, ValidationError),
        ({"name": "Wax", "price": Decimal("10"), "duration": 0}, ValidationError),
        ({"name": "Wax", "price": Decimal("10"), "category_id": 99}, NotFoundError),
    ],
)
def test_add_service_rejects_bad_fields(catalog_service, sample_workspace, kwargs, error):
    with pytest.raises(error):
        catalog_service.add_service(sample_workspace.id, **kwargs)
    assert catalog_service.list_services(sample_workspace.id) == []


def test_category_of_other_workspace_rejected(
    catalog_service, workspace_service, sample_workspace
):
    other = workspace_service.create_workspace("Studio Süd")
    foreign = catalog_service.add_category(other, "Hair")

    with pytest.raises(NotFoundError, match=f"Category {foreign} not found"):
        catalog_service.add_service(sample_workspace.id, "Cut", Decimal("30"), category_id=foreign)


def test_duplicate_service_rejected(catalog_service, sample_workspace, gel_polish):
    with pytest.raises(ConflictError):
        catalog_service.add_service(sample_workspace.id, "GEL POLISH", Decimal("40"))


def test_catalog_edits_need_admin(
    catalog_service, sample_workspace, sample_master, sample_admin, gel_polish
):
    with pytest.raises(PermissionDeniedError):
        catalog_service.add_category(
            sample_workspace.id, "Brows", acting_member_id=sample_master.id
        )
    with pytest.raises(PermissionDeniedError):
        catalog_service.update_service(
            gel_polish, price=Decimal("1"), acting_member_id=sample_master.id
        )
    with pytest.raises(PermissionDeniedError):
        catalog_service.delete_service(gel_polish, acting_member_id=sample_master.id)

    catalog_service.update_service(gel_polish, price=Decimal("38"), acting_member_id=sample_admin.id)
    assert catalog_service.get_service(gel_polish).price == Decimal("38")


def test_update_service_changes_only_given_fields(catalog_service, gel_polish):
    updated = catalog_service.update_service(gel_polish, name="Gel polish deluxe")

    assert updated.name == "Gel polish deluxe"
    assert updated.price == Decimal("35")
    assert updated.duration == 60
    assert updated.category_name == "Nails"


def test_update_service_moves_between_categories(
    catalog_service, sample_workspace, gel_polish
):
    brows = catalog_service.add_category(sample_workspace.id, "Brows")

    moved = catalog_service.update_service(gel_polish, category_id=brows)
    assert moved.category_name == "Brows"

    cleared = catalog_service.update_service(gel_polish, clear_category=True)
    assert cleared.category_id is None
    assert cleared.category_label == UNCATEGORIZED


def test_update_service_name_conflict(catalog_service, sample_workspace, gel_polish):
    other = catalog_service.add_service(sample_workspace.id, "Manicure", Decimal("25"))

    with pytest.raises(ConflictError):
        catalog_service.update_service(other, name="Gel Polish")
    # Keeping its own name is not a conflict
    catalog_service.update_service(gel_polish, name="Gel polish")


def test_list_services_filters_by_category(catalog_service, sample_workspace, nails, gel_polish):
    catalog_service.add_service(sample_workspace.id, "Consultation", Decimal("0"))

    assert len(catalog_service.list_services(sample_workspace.id)) == 2
    only_nails = catalog_service.list_services(sample_workspace.id, category_id=nails)
    assert [s.name for s in only_nails] == ["Gel polish"]


def test_delete_category_keeps_services(catalog_service, nails, gel_polish):
    catalog_service.delete_category(nails)

    assert catalog_service.get_category(nails) is None
    item = catalog_service.get_service(gel_polish)
    assert item is not None
    assert item.category_id is None
    assert item.category_label == UNCATEGORIZED


def test_delete_service(catalog_service, gel_polish):
    catalog_service.delete_service(gel_polish)

    assert catalog_service.get_service(gel_polish) is None
    with pytest.raises(NotFoundError, match=f"Service {gel_polish} not found"):
        catalog_service.require_service(gel_polish)


def test_service_labels(catalog_service, sample_workspace, gel_polish):
    labels = catalog_service.service_labels(sample_workspace.id)

    assert labels[str(gel_polish)] == "Gel polish"
    assert labels["gel polish"] == "Gel polish"


def test_add_and_list_professions(profession_service):
    profession_service.add_profession("Stylist")
    profession_service.add_profession("Brow master")

    assert [p.name for p in profession_service.list_professions()] == ["Brow master", "Stylist"]


def test_duplicate_or_empty_profession_rejected(profession_service):
    profession_service.add_profession("Stylist")

    with pytest.raises(ConflictError):
        profession_service.add_profession(" stylist ")
    with pytest.raises(ValidationError):
        profession_service.add_profession("")


def test_delete_profession(profession_service):
    profession_id = profession_service.add_profession("Stylist")

    profession_service.delete_profession(profession_id)

    assert profession_service.list_professions() == []
    with pytest.raises(NotFoundError):
        profession_service.delete_profession(profession_id)


def test_member_profession_checked_against_list(
    profession_service, member_service, sample_workspace
):
    # With no professions listed any text is accepted
    free = member_service.create_member(sample_workspace.id, "Bella", profession="Lash maker")
    assert member_service.get_member(free).profession == "Lash maker"

    profession_service.add_profession("Nail artist")
    with pytest.raises(ValidationError, match="Unknown profession"):
        member_service.create_member(sample_workspace.id, "Clara", profession="Lash maker")

    known = member_service.create_member(
        sample_workspace.id, "Dora", role=MemberRole.MASTER, profession="nail artist"
    )
    assert member_service.get_member(known).profession == "Nail artist"
