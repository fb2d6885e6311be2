"""The reference-data kinds served by the generic CRUD workflow."""

from poseidon.models import BidList, CurvePoint, Rating, RuleName, Trade
from poseidon.schemas.records import (
    BidListRecord,
    CurvePointRecord,
    RatingRecord,
    RuleNameRecord,
    TradeRecord,
)
from poseidon.services.crud import EntityKind
from poseidon.services.validation import (
    FormField,
    MaxLength,
    Min,
    NotBlank,
    NotNull,
    PositiveOrZero,
    parse_datetime,
    parse_float,
    parse_int,
)

BID_LIST = EntityKind(
    name="bidList",
    label="Bid",
    model=BidList,
    record=BidListRecord,
    fields=(
        FormField(
            "account",
            "Account",
            rules=(
                NotBlank("Account is mandatory."),
                MaxLength(30, "Account must not exceed 30 characters."),
            ),
        ),
        FormField(
            "type",
            "Type",
            rules=(
                NotBlank("Type is mandatory."),
                MaxLength(30, "Type must not exceed 30 characters."),
            ),
        ),
        FormField(
            "bid_quantity",
            "Bid Quantity",
            parse=parse_float,
            input_type="number",
            rules=(
                NotNull("Bid quantity is mandatory."),
                PositiveOrZero("Bid quantity must be zero or positive."),
            ),
        ),
    ),
    columns=(
        ("id", "Id"),
        ("account", "Account"),
        ("type", "Type"),
        ("bid_quantity", "Bid Quantity"),
    ),
)

CURVE_POINT = EntityKind(
    name="curvePoint",
    label="Curve point",
    model=CurvePoint,
    record=CurvePointRecord,
    fields=(
        FormField(
            "curve_id",
            "Curve Id",
            parse=parse_int,
            input_type="number",
            rules=(
                NotNull("Curve ID cannot be null."),
                Min(1, "Curve ID must be a positive number."),
            ),
        ),
        FormField("as_of_date", "As of date", parse=parse_datetime, input_type="datetime-local"),
        FormField(
            "term",
            "Term",
            parse=parse_float,
            input_type="number",
            rules=(
                NotNull("Term cannot be null."),
                PositiveOrZero("Term must be zero or positive."),
            ),
        ),
        FormField(
            "value",
            "Value",
            parse=parse_float,
            input_type="number",
            rules=(NotNull("Value cannot be null."),),
        ),
    ),
    columns=(
        ("id", "Id"),
        ("curve_id", "Curve Point Id"),
        ("term", "Term"),
        ("value", "Value"),
    ),
)

RATING = EntityKind(
    name="rating",
    label="Rating",
    model=Rating,
    record=RatingRecord,
    fields=(
        FormField(
            "moodys_rating",
            "Moody's Rating",
            rules=(
                NotBlank("Moody's rating is mandatory."),
                MaxLength(125, "Moody's rating must not exceed 125 characters."),
            ),
        ),
        FormField(
            "sand_p_rating",
            "S&P Rating",
            rules=(
                NotBlank("S&P rating is mandatory."),
                MaxLength(125, "S&P rating must not exceed 125 characters."),
            ),
        ),
        FormField(
            "fitch_rating",
            "Fitch Rating",
            rules=(
                NotBlank("Fitch rating is mandatory."),
                MaxLength(125, "Fitch rating must not exceed 125 characters."),
            ),
        ),
        FormField(
            "order_number",
            "Order",
            parse=parse_int,
            input_type="number",
            rules=(NotNull("Order number is mandatory."),),
        ),
    ),
    columns=(
        ("id", "Id"),
        ("moodys_rating", "Moody's Rating"),
        ("sand_p_rating", "S&P Rating"),
        ("fitch_rating", "Fitch Rating"),
        ("order_number", "Order"),
    ),
)

RULE_NAME = EntityKind(
    name="ruleName",
    label="Rule",
    model=RuleName,
    record=RuleNameRecord,
    fields=(
        FormField(
            "name",
            "Name",
            rules=(
                NotBlank("Name is mandatory."),
                MaxLength(125, "Name must not exceed 125 characters."),
            ),
        ),
        FormField(
            "description",
            "Description",
            rules=(MaxLength(125, "Description must not exceed 125 characters."),),
        ),
        FormField(
            "json_str",
            "Json",
            rules=(MaxLength(125, "Json must not exceed 125 characters."),),
        ),
        FormField(
            "template",
            "Template",
            rules=(MaxLength(512, "Template must not exceed 512 characters."),),
        ),
        FormField(
            "sql_str",
            "SQL",
            rules=(MaxLength(125, "SQL must not exceed 125 characters."),),
        ),
        FormField(
            "sql_part",
            "SQL Part",
            rules=(MaxLength(125, "SQL part must not exceed 125 characters."),),
        ),
    ),
    columns=(
        ("id", "Id"),
        ("name", "Name"),
        ("description", "Description"),
        ("json_str", "Json"),
        ("template", "Template"),
        ("sql_str", "SQL"),
        ("sql_part", "SQL Part"),
    ),
)

TRADE = EntityKind(
    name="trade",
    label="Trade",
    model=Trade,
    record=TradeRecord,
    fields=(
        FormField(
            "account",
            "Account",
            rules=(
                NotBlank("Account is mandatory."),
                MaxLength(30, "Account must not exceed 30 characters."),
            ),
        ),
        FormField(
            "type",
            "Type",
            rules=(
                NotBlank("Type is mandatory."),
                MaxLength(30, "Type must not exceed 30 characters."),
            ),
        ),
        FormField(
            "buy_quantity",
            "Buy Quantity",
            parse=parse_float,
            input_type="number",
            rules=(
                NotNull("Buy quantity is mandatory."),
                PositiveOrZero("Buy quantity must be zero or positive."),
            ),
        ),
    ),
    columns=(
        ("id", "Id"),
        ("account", "Account"),
        ("type", "Type"),
        ("buy_quantity", "Buy Quantity"),
    ),
)

ENTITY_KINDS: tuple[EntityKind, ...] = (BID_LIST, CURVE_POINT, RATING, RULE_NAME, TRADE)
