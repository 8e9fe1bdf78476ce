"""
Minimal example: diff two versions of a resource definition.

Run this with:
    python examples/minimal.py
"""

from stackdiff import RenderOptions, build_diff, get_diff_lines, has_changes


def main() -> None:
    before = {
        "Type": "AWS::Lambda::Function",
        "Properties": {
            "Runtime": "python3.11",
            "MemorySize": 128,
            "Environment": {"Variables": {"STAGE": "dev"}},
            "Layers": ["arn:layer:base:1", "arn:layer:utils:3"],
        },
    }
    after = {
        "Type": "AWS::Lambda::Function",
        "Properties": {
            "Runtime": "python3.12",
            "MemorySize": 256,
            "Environment": {"Variables": {"STAGE": "dev", "DEBUG": True}},
            "Layers": ["arn:layer:base:1", "arn:layer:utils:4"],
        },
    }

    diff = build_diff(before, after)
    print(f"Changed: {has_changes(diff)}\n")

    # Only changed properties, colored
    for line in get_diff_lines(diff, RenderOptions(), key="Handler"):
        print(line)

    print()

    # Everything, plain text
    options = RenderOptions(show_color=False, show_unchanged_properties=True)
    for line in get_diff_lines(diff, options, key="Handler"):
        print(line)


if __name__ == "__main__":
    main()
