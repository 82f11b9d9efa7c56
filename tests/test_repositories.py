"""Tests for the entity-specific stores"""

from datetime import date, datetime, timedelta

import pytest

from seating.exceptions import DuplicateEmailError, EntityNotFoundError, EntityValidationError
from seating.models import Customer, Reservation, ReservationStatus, Table
from seating.repositories import ReservationRepository

from conftest import DINNER


def book(db, table, at=DINNER, customer_id=1, restaurant_id=1, status=ReservationStatus.CONFIRMED, **kwargs):
    return db.reservations.save(
        Reservation(
            customer_id=customer_id,
            restaurant_id=restaurant_id,
            table_id=table.table_id,
            party_size=kwargs.pop("party_size", 2),
            reservation_datetime=at,
            status=status,
            **kwargs,
        )
    )


# Tables

def test_table_number_unique_within_section(db, layout):
    with pytest.raises(EntityValidationError, match="M1"):
        db.tables.save(Table(section_id=layout["main"].section_id, table_number="M1", capacity=2))
    
    # Same number in another section is fine
    other = db.tables.save(Table(section_id=layout["patio"].section_id, table_number="M1", capacity=2))
    assert other.table_id is not None


def test_table_queries(db, layout):
    main_id = layout["main"].section_id
    
    assert [t.table_number for t in db.tables.find_by_section_id(main_id)] == ["M1", "M2", "M3", "M4"]
    assert [t.table_number for t in db.tables.find_by_min_capacity(6)] == ["M4", "P2"]
    assert db.tables.find_one_by_section_id_and_table_number(main_id, "M3").capacity == 4
    assert db.tables.count_by_section_id(main_id) == 4


def test_deactivate_and_activate_table(db, layout):
    m2 = layout["tables"]["M2"]
    main_id = layout["main"].section_id
    
    db.tables.deactivate_table(m2.table_id)
    
    assert db.tables.find_by_id(m2.table_id).is_active is False
    assert db.tables.count_active_by_section_id(main_id) == 3
    assert [t.table_number for t in db.tables.find_all_inactive()] == ["M2"]
    
    db.tables.activate_table(m2.table_id)
    assert db.tables.find_by_id(m2.table_id).is_active is True
    
    with pytest.raises(EntityNotFoundError):
        db.tables.deactivate_table(999)


def test_delete_tables_by_section(db, layout):
    assert db.tables.delete_by_section_id(layout["patio"].section_id) == 2
    assert db.tables.count() == 4


# Sections

def test_section_queries(db, restaurant, layout):
    assert db.sections.count_by_restaurant_id(restaurant.restaurant_id) == 2
    assert db.sections.find_one_by_restaurant_id_and_name(restaurant.restaurant_id, "Patio").section_id == (
        layout["patio"].section_id
    )
    assert db.sections.find_one_by_restaurant_id_and_name(restaurant.restaurant_id, "Bar") is None


# Customers

def test_customer_email_is_unique_ignoring_case(db, customer):
    with pytest.raises(DuplicateEmailError):
        db.customers.save(
            Customer(first_name="John", last_name="Doe", email="JANE.SMITH@example.com", phone="555")
        )


def test_customer_can_be_saved_again_with_own_email(db, customer):
    customer.notes = "Window seat"
    
    db.customers.update(customer)
    
    assert db.customers.find_by_email("jane.smith@EXAMPLE.com").notes == "Window seat"
    assert db.customers.exists_by_email("Jane.Smith@example.com")


def test_customer_searches(db, customer):
    db.customers.save(Customer(first_name="John", last_name="Smithers", email="john@example.com", phone="555"))
    db.customers.save(Customer(first_name="Ann", last_name="Lee", email="ann@example.com", phone="555", notes="VIP"))
    
    assert [c.first_name for c in db.customers.search_by_name("smith")] == ["Jane", "John"]
    assert [c.first_name for c in db.customers.search_by_name("jane smith")] == ["Jane"]
    assert len(db.customers.search_by_name("  ")) == 3
    assert [c.first_name for c in db.customers.find_by_allergy("PEANUT")] == ["Jane"]
    assert db.customers.find_by_allergy("") == []
    assert [c.first_name for c in db.customers.find_with_allergies()] == ["Jane"]
    assert [c.first_name for c in db.customers.find_with_notes()] == ["Ann"]


# Reservations

def test_conflicts_use_half_open_windows(db, layout):
    table = layout["tables"]["M2"]
    book(db, table, at=DINNER)
    
    assert db.reservations.has_conflicting_reservation(table.table_id, DINNER + timedelta(minutes=119))
    assert db.reservations.has_conflicting_reservation(table.table_id, DINNER - timedelta(minutes=119))
    # Back-to-back bookings touch but do not overlap
    assert not db.reservations.has_conflicting_reservation(table.table_id, DINNER + timedelta(minutes=120))
    assert not db.reservations.has_conflicting_reservation(table.table_id, DINNER - timedelta(minutes=120))


def test_conflicts_respect_requested_duration(db, layout):
    table = layout["tables"]["M2"]
    book(db, table, at=DINNER)
    earlier = DINNER - timedelta(minutes=60)
    
    assert not db.reservations.has_conflicting_reservation(table.table_id, earlier, duration_minutes=60)
    assert db.reservations.has_conflicting_reservation(table.table_id, earlier, duration_minutes=61)


def test_conflicts_use_stored_duration_of_existing_booking(db, layout):
    table = layout["tables"]["M2"]
    book(db, table, at=DINNER, duration_minutes=30)
    
    assert not db.reservations.has_conflicting_reservation(table.table_id, DINNER + timedelta(minutes=30))


def test_conflicts_span_midnight(db, layout):
    table = layout["tables"]["M2"]
    late = datetime(2031, 6, 14, 23, 30)
    book(db, table, at=late)
    
    assert db.reservations.has_conflicting_reservation(table.table_id, datetime(2031, 6, 15, 0, 30))


def test_only_confirmed_reservations_conflict(db, layout):
    table = layout["tables"]["M2"]
    for status in (ReservationStatus.CANCELLED, ReservationStatus.COMPLETED, ReservationStatus.NO_SHOW):
        book(db, table, status=status)
    
    assert not db.reservations.has_conflicting_reservation(table.table_id, DINNER)


def test_conflict_check_can_exclude_a_reservation(db, layout):
    table = layout["tables"]["M2"]
    reservation = book(db, table)
    
    assert not db.reservations.has_conflicting_reservation(
        table.table_id, DINNER, exclude_reservation_id=reservation.reservation_id
    )
    assert db.reservations.find_conflicting_reservations(table.table_id, DINNER) == [reservation]


def test_reservation_date_queries(db, layout):
    m1, m2 = layout["tables"]["M1"], layout["tables"]["M2"]
    book(db, m1, at=DINNER)
    book(db, m2, at=DINNER + timedelta(days=1))
    book(db, m2, at=DINNER, status=ReservationStatus.CANCELLED)
    
    assert db.reservations.count_by_restaurant_and_date(1, DINNER.date()) == 2
    assert len(db.reservations.find_by_table_id_and_date(m2.table_id, date(2031, 6, 15))) == 1
    assert len(db.reservations.find_by_date_range(1, DINNER, DINNER + timedelta(days=1))) == 3
    assert len(db.reservations.find_active(1)) == 2
    assert len(db.reservations.find_active(1, from_datetime=DINNER + timedelta(hours=1))) == 1
    assert len(db.reservations.find_by_status(ReservationStatus.CANCELLED)) == 1


def test_upcoming_and_past_for_customer(db, layout):
    table = layout["tables"]["M1"]
    book(db, table, at=DINNER - timedelta(days=7))
    book(db, table, at=DINNER + timedelta(days=7))
    
    assert len(db.reservations.find_upcoming(1, DINNER)) == 1
    assert len(db.reservations.find_past(1, DINNER)) == 1
    assert db.reservations.delete_by_customer_id(1) == 2


def test_reservation_duration_survives_reload(db, layout, settings):
    reservation = book(db, layout["tables"]["M1"], duration_minutes=45)
    
    reopened = ReservationRepository(settings.data_path(settings.reservations_file))
    
    assert reopened.find_by_id(reservation.reservation_id) == reservation
    assert reopened.find_by_id(reservation.reservation_id).duration_minutes == 45


def test_legacy_reservation_file_without_duration(tmp_path):
    path = tmp_path / "reservations.csv"
    path.write_text(
        "reservation_id,customer_id,restaurant_id,table_id,party_size,reservation_datetime,"
        "status,special_requests,created_at,updated_at\n"
        "1,1,1,2,4,2031-06-14T19:00:00,CONFIRMED,,2031-06-01T10:00:00,2031-06-01T10:00:00\n",
        encoding="utf-8",
    )
    
    repository = ReservationRepository(path, default_duration_minutes=90)
    
    reservation = repository.find_by_id(1)
    assert reservation.duration_minutes == 90
    assert reservation.status == ReservationStatus.CONFIRMED


def test_deleting_a_table_leaves_reservations_alone(db, layout):
    table = layout["tables"]["M2"]
    book(db, table)
    before = db.reservations.file_path.read_bytes()
    
    db.tables.delete_by_id(table.table_id)
    
    assert db.reservations.file_path.read_bytes() == before
    assert db.reservations.find_by_table_id(table.table_id)[0].table_id == table.table_id
