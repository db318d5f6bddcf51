# Import all models so that SQLAlchemy registers them for metadata.create_all
from app.models.audit_log import AuditLog
from app.models.employee import Employee, EmployeeSchedule
from app.models.inventory import InventoryCategory, InventoryItem, InventoryTransaction
from app.models.order import Order
from app.models.payment import PaymentTransaction
from app.models.vendor import Vendor, VendorCategory, VendorRating
from app.models.venue import Venue, VenueAvailability, VenueBooking

__all__ = [
    "AuditLog",
    "Employee",
    "EmployeeSchedule",
    "InventoryCategory",
    "InventoryItem",
    "InventoryTransaction",
    "Order",
    "PaymentTransaction",
    "Vendor",
    "VendorCategory",
    "VendorRating",
    "Venue",
    "VenueAvailability",
    "VenueBooking",
]
