"""
Schema validation demonstration for jsonshape.
"""

import jsonshape
from jsonshape import (
    ArrayType,
    BooleanType,
    NumberType,
    ObjectType,
    Schema,
    SchemaValidationError,
    StringType,
)


def main():
    print("jsonshape - Schema Validation Demo")
    print("=" * 40)

    schema = Schema(
        [
            ("name", StringType().trim().min_length(3)),
            ("age", NumberType().gt(18).lt(100)),
            ("is_student", BooleanType().falsy()),
            ("tags", ArrayType(StringType().to_lowercase()).max_items(3)),
            (
                "address",
                ObjectType()
                .property("city", StringType().min_length(2))
                .property("zip", StringType().pattern(r"^\d{5}$")),
            ),
        ]
    )

    documents = [
        """{"name": "  John Doe ", "age": 30, "is_student": false,
            "tags": ["Admin", "OPS"], "address": {"city": "Oslo", "zip": "01234"}}""",
        """{"name": "Jo", "age": 15, "is_student": true,
            "tags": ["a", "b", "c", "d"], "address": {"city": "X"}}""",
    ]

    for i, text in enumerate(documents, 1):
        print(f"\n{i}. Validating document")
        doc = jsonshape.parse(text)
        try:
            cleaned = schema.validate(doc)
            print(f"Valid, normalized: {cleaned.serialize()}")
        except SchemaValidationError as e:
            print(str(e))

    print("\n3. Non-raising check")
    result = schema.check(jsonshape.parse('{"name": "Ann"}'))
    print(f"ok={result.ok}")
    for error in result.errors:
        print(f"  {type(error).__name__}: {error}")


if __name__ == "__main__":
    main()
