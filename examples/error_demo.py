"""
Error reporting demonstration for jsonshape.
"""

import jsonshape
from jsonshape import ParseConfig, ParseError, ParseLimits, SecurityError


def show(text, config=None):
    try:
        jsonshape.parse(text, config)
    except ParseError as e:
        print("Error caught:")
        print(str(e))


def main():
    print("jsonshape - Error Reporting Demo")
    print("=" * 40)

    print("\n1. Missing value")
    show('{"key": }')

    print("\n2. Missing colon")
    show('{"key" "value"}')

    print("\n3. Unclosed object")
    show('{"key": "value"')

    print("\n4. Multiline document")
    show(
        """{
    "name": "John Doe",
    "age": 30,
    "active": True
}"""
    )

    print("\n5. Invalid number")
    show("[1, 02, 3]")

    print("\n6. Without context")
    show("[1, 2,]", ParseConfig(include_context=False))

    print("\n7. Nesting limit")
    try:
        jsonshape.parse("[[[[1]]]]", ParseConfig(limits=ParseLimits(max_nesting_depth=3)))
    except SecurityError as e:
        print(f"Blocked: {e}")


if __name__ == "__main__":
    main()
