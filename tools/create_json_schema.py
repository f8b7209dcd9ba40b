"""(Re-)create the JSON schema for sfntinfo.metadata."""

import json

from pydantic import TypeAdapter

import sfntinfo.metadata


def main():
    font_adapter = TypeAdapter(sfntinfo.metadata.Font)
    print(json.dumps(font_adapter.json_schema(), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
