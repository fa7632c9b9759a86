"""Demonstration sellers matched against newly posted jobs."""

from ..shared.records import SellerRecord

DEFAULT_SELLER_ROSTER = (
    SellerRecord(104, "Vikram", frozenset({"Plumbing", "Painting"}), "Delhi", "9876543214"),
    SellerRecord(106, "Manish", frozenset({"Electrician", "Welding"}), "Bangalore", "9876543216"),
    SellerRecord(108, "Aman", frozenset({"AC Repair", "Refrigeration"}), "Mumbai", "9876543218"),
    SellerRecord(110, "Rajiv", frozenset({"Woodwork", "Furniture"}), "Kochi", "9876543220"),
    SellerRecord(112, "Deepak", frozenset({"Masonry", "Tiling"}), "Indore", "9876543222"),
    SellerRecord(114, "Painter", frozenset({"Painting", "Interior"}), "Chennai", "9876543224"),
    SellerRecord(116, "Gardener", frozenset({"Gardening", "Landscaping"}), "Lucknow", "9876543226"),
    SellerRecord(118, "Metalworker", frozenset({"Metalwork", "Welding"}), "Kolkata", "9876543228"),
    SellerRecord(
        120, "Repairman", frozenset({"Repair", "General Maintenance"}), "Asansol", "9876543230"
    ),
    SellerRecord(
        122, "Security", frozenset({"CCTV", "Security Systems"}), "Hyderabad", "9876543232"
    ),
)
