"""Tests for the entity <-> row codecs"""

from datetime import datetime

import pytest

from seating.codecs import CustomerCodec, ReservationCodec, RestaurantCodec, SectionCodec, TableCodec
from seating.exceptions import EntityValidationError
from seating.models import Customer, Reservation, ReservationStatus, Restaurant, Section, Table


def reservation_row(**overrides):
    row = {
        "reservation_id": "7",
        "customer_id": "1",
        "restaurant_id": "1",
        "table_id": "3",
        "party_size": "4",
        "reservation_datetime": "2031-06-14T19:00:00",
        "status": "confirmed",
        "special_requests": "",
        "created_at": "2031-06-01T10:00:00",
        "updated_at": "2031-06-01T10:00:00",
        "duration_minutes": "90",
    }
    row.update(overrides)
    return row


def test_table_to_row_uses_column_order():
    row = TableCodec().to_row(Table(table_id=1, section_id=2, table_number="A1", capacity=4))
    
    assert list(row) == TableCodec.columns
    assert row == {
        "table_id": "1",
        "section_id": "2",
        "table_number": "A1",
        "capacity": "4",
        "is_active": "true",
    }


def test_table_blank_active_flag_means_active():
    table = TableCodec().from_row(
        {"table_id": "1", "section_id": "2", "table_number": "A1", "capacity": "4", "is_active": ""}
    )
    
    assert table.is_active is True


@pytest.mark.parametrize("capacity", ["0", "-2", "four"])
def test_table_rejects_bad_capacity(capacity):
    with pytest.raises(EntityValidationError):
        TableCodec().from_row(
            {"table_id": "1", "section_id": "2", "table_number": "A1", "capacity": capacity, "is_active": "true"}
        )


def test_table_rejects_non_boolean_flag():
    with pytest.raises(EntityValidationError):
        TableCodec().from_row(
            {"table_id": "1", "section_id": "2", "table_number": "A1", "capacity": "4", "is_active": "yes"}
        )


def test_section_requires_name():
    with pytest.raises(EntityValidationError):
        SectionCodec().to_row(Section(restaurant_id=1, name="  ", num_tables=3))


def test_restaurant_round_trip():
    codec = RestaurantCodec()
    restaurant = Restaurant(
        restaurant_id=3,
        name="Chez, \"Nous\"",
        location="1 Main St",
        contact_email="info@cheznous.com",
        contact_phone="+15550000000",
    )
    
    assert codec.from_row(codec.to_row(restaurant)) == restaurant


def test_customer_rejects_invalid_email():
    with pytest.raises(EntityValidationError, match="email"):
        CustomerCodec().to_row(
            Customer(first_name="Jane", last_name="Smith", email="not-an-email", phone="555")
        )


def test_customer_optional_fields_blank_to_none():
    customer = CustomerCodec().from_row(
        {
            "customer_id": "4",
            "first_name": "Jane",
            "last_name": "Smith",
            "email": "jane@example.com",
            "phone": "555",
            "allergies": "",
            "notes": " ",
            "restaurant_id": "",
        }
    )
    
    assert customer.allergies is None
    assert customer.notes is None
    assert customer.restaurant_id is None


def test_customer_missing_phone_in_row():
    with pytest.raises(EntityValidationError, match="phone"):
        CustomerCodec().from_row(
            {"customer_id": "4", "first_name": "Jane", "last_name": "Smith", "email": "jane@example.com", "phone": ""}
        )


def test_reservation_from_row():
    reservation = ReservationCodec().from_row(reservation_row())
    
    assert reservation.reservation_id == 7
    assert reservation.reservation_datetime == datetime(2031, 6, 14, 19, 0)
    assert reservation.status == ReservationStatus.CONFIRMED
    assert reservation.special_requests is None
    assert reservation.duration_minutes == 90
    assert reservation.end_datetime == datetime(2031, 6, 14, 20, 30)


def test_reservation_status_accepts_member_name():
    reservation = ReservationCodec().from_row(reservation_row(status="NO_SHOW"))
    
    assert reservation.status == ReservationStatus.NO_SHOW


def test_reservation_rejects_unknown_status():
    with pytest.raises(EntityValidationError, match="status"):
        ReservationCodec().from_row(reservation_row(status="pending"))


def test_reservation_rejects_timezone():
    with pytest.raises(EntityValidationError):
        ReservationCodec().from_row(reservation_row(reservation_datetime="2031-06-14T19:00:00+02:00"))


def test_reservation_without_duration_column_uses_default():
    row = reservation_row()
    del row["duration_minutes"]
    
    assert ReservationCodec().from_row(row).duration_minutes == 120
    assert ReservationCodec(default_duration_minutes=90).from_row(row).duration_minutes == 90


def test_reservation_blank_timestamps_default_to_now():
    before = datetime.now()
    reservation = ReservationCodec().from_row(reservation_row(created_at="", updated_at=""))
    
    assert reservation.created_at >= before
    assert reservation.updated_at >= before


def test_reservation_to_row_formats_values():
    reservation = Reservation(
        reservation_id=2,
        customer_id=1,
        restaurant_id=1,
        table_id=3,
        party_size=2,
        reservation_datetime=datetime(2031, 6, 14, 19, 0),
        status=ReservationStatus.CANCELLED,
        created_at=datetime(2031, 6, 1, 10, 0),
        updated_at=datetime(2031, 6, 2, 10, 0),
    )
    
    row = ReservationCodec().to_row(reservation)
    
    assert row["reservation_datetime"] == "2031-06-14T19:00:00"
    assert row["status"] == "cancelled"
    assert row["special_requests"] == ""
    assert row["duration_minutes"] == "120"


def test_reservation_rejects_non_positive_party_size():
    with pytest.raises(EntityValidationError):
        ReservationCodec().to_row(
            Reservation(customer_id=1, restaurant_id=1, table_id=1, party_size=0, reservation_datetime=datetime(2031, 1, 1))
        )


def test_primary_key_accessors():
    codec = TableCodec()
    table = Table(section_id=1, table_number="A1", capacity=2)
    
    assert codec.get_primary_key(table) is None
    codec.set_primary_key(table, "12")
    assert table.table_id == 12
    
    with pytest.raises(EntityValidationError):
        codec.set_primary_key(table, "twelve")
    with pytest.raises(EntityValidationError):
        codec.get_primary_key(None)


def test_customer_email_round_trips_unchanged():
    codec = CustomerCodec()
    customer = Customer(customer_id=1, first_name="Jane", last_name="Smith", email=" jane@example.com ", phone="555")
    
    assert codec.from_row(codec.to_row(customer)) == customer


def test_set_primary_key_rejects_non_positive():
    with pytest.raises(EntityValidationError, match="must be positive"):
        TableCodec().set_primary_key(Table(section_id=1, table_number="A1", capacity=2), 0)
