"""
jsonshape demonstration script.
"""

import jsonshape


def main():
    print("jsonshape - Strict JSON Parser Demo")
    print("=" * 40)

    examples = [
        ('{"name": "John Doe", "age": 30, "is_student": false}', "Simple object"),
        ('[1, -0, 0.5, 1e10, 1.0e-3]', "Numbers"),
        ('{"quote": "He said \\"hi\\"", "path": "C:\\\\temp"}', "Escapes"),
        (
            """
        {
            "server": {"host": "localhost", "port": 8080, "ssl": false},
            "features": ["auth", "logging"],
            "debug": true
        }
        """,
            "Nested configuration",
        ),
        ('{"test": "value1", "test": "value2"}', "Duplicate keys (last value wins)"),
    ]

    for i, (json_str, description) in enumerate(examples, 1):
        print(f"\n{i}. {description}")
        print(f"Input:  {json_str.strip()}")

        try:
            result = jsonshape.parse(json_str)
            print(f"Output: {result.serialize()}")
        except jsonshape.ParseError as e:
            print(f"Error:  {e}")

    print(f"\n{len(examples) + 1}. Accessors")
    doc = jsonshape.parse('{"server": {"port": 8080}, "features": ["auth"]}')
    print(f"server.port  -> {doc.get('server').get('port').as_number()}")
    print(f"features[0]  -> {doc.get('features').at(0).as_string()}")
    print(f"features[5]  -> {doc.get('features').at(5)}")
    print(f"missing      -> {doc.get('missing')}")

    print(f"\n{len(examples) + 2}. json-style helpers")
    data = jsonshape.loads('{"a": [1, 2, null]}')
    print(f"loads: {data}")
    print(f"dumps: {jsonshape.dumps(data)}")


if __name__ == "__main__":
    main()
