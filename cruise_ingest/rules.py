"""
Deterministic import/export rules.

Alias tables, defaults and output layouts live here so the parsers and
generators stay table-driven.
"""

TARGET_ENCODING = "utf-8"

TAB = "\t"
COMMA = ","

# Sentinel column index for a canonical field with no matching header.
ABSENT = -1

# --- Offer sheet (cruises + casino offers) ---

OFFER_ALIASES = {
    "ship_name": ("ship name", "shipname", "ship"),
    "sailing_date": ("sailing date", "sailingdate", "sail date", "saildate", "date"),
    "itinerary": ("itinerary", "route", "destination"),
    "offer_code": ("offer code", "offercode", "code"),
    "offer_name": ("offer name", "offername", "offer"),
    "room_type": ("room type", "roomtype", "cabin type", "cabintype"),
    "guests_info": ("guests info", "guestsinfo", "guests"),
    "perks": ("perks", "benefits"),
    "ship_class": ("ship class", "shipclass", "class"),
    "trade_in_value": ("trade-in value", "tradeinvalue", "trade in value", "tradein"),
    "offer_expiry_date": (
        "offer expiry date", "offerexpirydate", "expiry date", "expirydate", "expiry", "expires",
    ),
    "price_interior": ("price interior", "priceinterior", "interior price", "interiorprice", "interior"),
    "price_ocean_view": (
        "price ocean view", "priceoceanview", "ocean view price", "oceanviewprice", "oceanview",
        "price oceanview",
    ),
    "price_balcony": ("price balcony", "pricebalcony", "balcony price", "balconyprice", "balcony"),
    "price_suite": ("price suite", "pricesuite", "suite price", "suiteprice", "suite"),
    "taxes_fees": ("taxes & fees", "taxes&fees", "taxesfees", "taxes", "port taxes", "port taxes & fees"),
    "ports_and_times": ("ports & times", "ports&times", "portsandtimes", "ports", "port schedule"),
    "offer_type": ("offer type / category", "offertype", "offer type", "category", "type"),
    "nights": ("nights", "duration", "length"),
    "departure_port": ("departure port", "departureport", "depart port", "home port", "port"),
}

OFFER_EXPORT_HEADERS = [
    "Ship Name",
    "Sailing Date",
    "Itinerary",
    "Offer Code",
    "Offer Name",
    "Room Type",
    "Guests Info",
    "Perks",
    "Ship Class",
    "Trade-In Value",
    "Offer Expiry Date",
    "Price Interior",
    "Price Ocean View",
    "Price Balcony",
    "Price Suite",
    "Taxes & Fees",
    "Ports & Times",
    "Offer Type / Category",
    "Nights",
    "Departure Port",
]

# --- Booked cruise sheet ---

BOOKED_ALIASES = {
    "id": ("id", "cruiseid", "cruise_id"),
    "ship": ("ship", "shipname", "ship name", "ship_name"),
    "departure_date": ("departuredate", "departure date", "departure_date", "saildate", "sail date"),
    "return_date": ("returndate", "return date", "return_date", "enddate", "end date"),
    "nights": ("nights", "duration", "length", "night"),
    "itinerary_name": ("itineraryname", "itinerary name", "itinerary_name", "itinerary"),
    "departure_port": ("departureport", "departure port", "departure_port", "homeport", "home port"),
    "ports_route": ("portsroute", "ports route", "ports_route", "ports", "route"),
    "reservation_number": (
        "reservationnumber", "reservation number", "reservation_number", "reservation", "confirmation",
    ),
    "guests": ("guests", "guest count", "guestcount", "pax"),
    "booking_id": ("bookingid", "booking id", "booking_id", "booking"),
    "is_booked": ("isbooked", "is booked", "is_booked", "booked", "status"),
    "winnings": (
        "winningsbroughthome", "winnings brought home", "winnings_brought_home", "winnings",
        "casino winnings",
    ),
    "points_earned": (
        "cruisepointsearned", "cruise points earned", "cruise_points_earned", "points earned", "points",
    ),
}

BOOKED_EXPORT_HEADERS = [
    "id",
    "ship",
    "departureDate",
    "returnDate",
    "nights",
    "itineraryName",
    "departurePort",
    "portsRoute",
    "reservationNumber",
    "guests",
    "bookingId",
    "isBooked",
    "winningsBroughtHome",
    "cruisePointsEarned",
]

# --- Row defaults ---

DEFAULT_NIGHTS = 7
DEFAULT_CABIN_TYPE = "Balcony"
DEFAULT_GUESTS = 2
TRUTHY_VALUES = ("true", "yes", "1", "booked")

# Arrow glyphs separating ports; the last one is how "→" reads after a
# UTF-8 -> Mac Roman round trip.
PORT_SEPARATORS = ("→", "›", "‚Üí")
BOOKED_PORT_SEPARATORS = PORT_SEPARATORS + ("|", ",")

OFFER_PORT_JOINER = " → "
BOOKED_PORT_JOINER = " | "
PERKS_JOINER = ", "

# Export placeholders for missing strings.
PLACEHOLDER_GUESTS_INFO = "2 Guests"
PLACEHOLDER_PERKS = "-"

# Ordered, first match wins; anything else is a "package".
OFFER_TYPE_RULES = (
    ("freeplay", ("freeplay", "free play")),
    ("discount", ("discount",)),
    ("obc", ("obc",)),
    ("2person", ("2 guest", "2 person", "2person")),
    ("1+discount", ("1+", "1 +")),
)
DEFAULT_OFFER_TYPE = "package"

# Fallback order when the cabin type does not name a price tier.
PRICE_TIER_FALLBACK = ("balcony", "oceanview", "interior", "suite")

# --- Calendar ---

ICS_PROPERTIES = ("UID", "SUMMARY", "DTSTART", "DTEND", "LOCATION", "DESCRIPTION")

EVENT_TYPE_RULES = (
    ("cruise", ("cruise", "sailing")),
    ("flight", ("flight", "air")),
    ("hotel", ("hotel", "stay")),
    ("travel", ("travel", "trip")),
)
DEFAULT_EVENT_TYPE = "other"
DEFAULT_EVENT_TITLE = "Untitled Event"
EVENT_SOURCE = "import"

ICS_HEADER = [
    "BEGIN:VCALENDAR",
    "VERSION:2.0",
    "PRODID:-//cruise-ingest//Cruise Tracker//EN",
    "CALSCALE:GREGORIAN",
    "METHOD:PUBLISH",
]
ICS_LINE_ENDING = "\r\n"
