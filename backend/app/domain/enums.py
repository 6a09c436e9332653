import enum


class UserRole(enum.Enum):
    PATIENT = "PATIENT"
    PHARMACIST = "PHARMACIST"
    ADMIN = "ADMIN"


class MedicineCategory(enum.Enum):
    OTC = "OTC"
    PRESCRIPTION = "PRESCRIPTION"
    SUPPLEMENTS = "SUPPLEMENTS"
    BABY_CARE = "BABY_CARE"
    DIABETES = "DIABETES"

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]


class OrderStatus(enum.Enum):
    PENDING_VERIFICATION = "PENDING_VERIFICATION"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    PACKED = "PACKED"
    OUT_FOR_DELIVERY = "OUT_FOR_DELIVERY"
    DELIVERED = "DELIVERED"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


class ChatRole(enum.Enum):
    USER = "user"
    ASSISTANT = "assistant"


_CATEGORY_LABELS = {
    MedicineCategory.OTC: "Over The Counter",
    MedicineCategory.PRESCRIPTION: "Prescription Only",
    MedicineCategory.SUPPLEMENTS: "Vitamins & Supplements",
    MedicineCategory.BABY_CARE: "Baby Care",
    MedicineCategory.DIABETES: "Diabetes Care",
}

_STATUS_LABELS = {
    OrderStatus.PENDING_VERIFICATION: "Pending Verification",
    OrderStatus.APPROVED: "Approved",
    OrderStatus.REJECTED: "Rejected",
    OrderStatus.PACKED: "Packed",
    OrderStatus.OUT_FOR_DELIVERY: "Out for Delivery",
    OrderStatus.DELIVERED: "Delivered",
}
