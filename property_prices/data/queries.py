"""SPARQL templates for HM Land Registry Price Paid Data.

Queries are plain strings. Literal values only have embedded double quotes
escaped; callers must normalise case because the store matches exactly.
"""

RESULT_CAP = 100
ORDER_BY = "ORDER BY"

_PREFIXES = """
    PREFIX rdf: <http://www.w3.org/1999/02/22-rdf-syntax-ns#>
    PREFIX rdfs: <http://www.w3.org/2000/01/rdf-schema#>
    PREFIX xsd: <http://www.w3.org/2001/XMLSchema#>
    PREFIX lrppi: <http://landregistry.data.gov.uk/def/ppi/>
    PREFIX lrcommon: <http://landregistry.data.gov.uk/def/common/>
    PREFIX skos: <http://www.w3.org/2004/02/skos/core#>
"""

_SELECT = (
    "SELECT ?amount ?date ?paon ?saon ?street ?town ?county ?postcode "
    "?propertyType ?estateType ?newBuild ?category"
)

_TRANSACTION_PATTERN = """
      ?transx lrppi:propertyAddress ?addr ;
              lrppi:pricePaid ?amount ;
              lrppi:transactionDate ?date ;
              lrppi:propertyType ?propertyType ;
              lrppi:transactionCategory/skos:prefLabel ?category .
"""

_TAIL = f"""    }}
    ORDER BY DESC(?date)
    LIMIT {RESULT_CAP}
"""


def escape_literal(value: str) -> str:
    return value.replace('"', '\\"')


def postcode_query(postcode: str) -> str:
    """Transactions whose address has exactly this postcode."""
    return (
        _PREFIXES
        + f"\n    {_SELECT}\n    WHERE {{"
        + _TRANSACTION_PATTERN
        + f'\n      ?addr lrcommon:postcode "{escape_literal(postcode)}" .\n'
        + """
      OPTIONAL { ?addr lrcommon:paon ?paon }
      OPTIONAL { ?addr lrcommon:saon ?saon }
      OPTIONAL { ?addr lrcommon:street ?street }
      OPTIONAL { ?addr lrcommon:town ?town }
      OPTIONAL { ?addr lrcommon:county ?county }
      OPTIONAL { ?transx lrppi:estateType ?estateType }
      OPTIONAL { ?transx lrppi:newBuild ?newBuild }
"""
        + _TAIL
    )


def address_query(
    street: str,
    city: str,
    house_number: str | None = None,
    postcode: str | None = None,
) -> str:
    """Transactions on a street in a town, optionally narrowed to a house
    number (PAON) and/or postcode."""
    constraints = [
        f'      ?addr lrcommon:street "{escape_literal(street)}"^^xsd:string ;',
        f'            lrcommon:town "{escape_literal(city)}"^^xsd:string .',
    ]
    if house_number:
        constraints.append(
            f'      ?addr lrcommon:paon "{escape_literal(house_number)}"^^xsd:string .'
        )
    if postcode:
        constraints.append(
            f'      ?addr lrcommon:postcode "{escape_literal(postcode)}"^^xsd:string .'
        )

    return (
        _PREFIXES
        + f"\n    {_SELECT}\n    WHERE {{\n"
        + "\n".join(constraints)
        + "\n"
        + _TRANSACTION_PATTERN
        + """
      OPTIONAL { ?addr lrcommon:county ?county }
      OPTIONAL { ?addr lrcommon:paon ?paon }
      OPTIONAL { ?addr lrcommon:saon ?saon }
      OPTIONAL { ?addr lrcommon:street ?street }
      OPTIONAL { ?addr lrcommon:town ?town }
      OPTIONAL { ?addr lrcommon:postcode ?postcode }
      OPTIONAL { ?transx lrppi:estateType ?estateType }
      OPTIONAL { ?transx lrppi:newBuild ?newBuild }
"""
        + _TAIL
    )


def add_date_filters(
    query: str, from_date: str | None = None, to_date: str | None = None
) -> str:
    """Insert inclusive date bounds before the closing brace of the WHERE block.

    Returns the query unchanged when no bounds are given, or when the last
    closing brace does not come before ORDER BY.
    """
    if not from_date and not to_date:
        return query

    where_end = query.rfind("}")
    order_by = query.find(ORDER_BY)
    if where_end == -1 or order_by == -1 or where_end > order_by:
        return query

    filters = []
    if from_date:
        filters.append(f'      FILTER(?date >= "{from_date}"^^xsd:date)')
    if to_date:
        filters.append(f'      FILTER(?date <= "{to_date}"^^xsd:date)')

    return query[:where_end] + "\n" + "\n".join(filters) + "\n    " + query[where_end:]
