#!/usr/bin/env python3
"""
Render a change set the way ``stackdiff changeset`` does.

Demonstrates:
1. A Modify that requires replacement, with the property note attached
2. Stack tag changes shown under StackTags
3. An Import rendered with its own icon and color
4. Per-action totals

The response below is a trimmed DescribeChangeSet document; no AWS calls.
"""

import json

from stackdiff import RenderOptions, render_change_set


# =============================================================================
# Sample response
# =============================================================================


def resource(action: str, logical_id: str, resource_type: str, **fields) -> dict:
    change = {
        "Action": action,
        "LogicalResourceId": logical_id,
        "ResourceType": resource_type,
    }
    for name in ("BeforeContext", "AfterContext"):
        if name in fields:
            fields[name] = json.dumps(fields[name])
    change.update(fields)
    return {"Type": "Resource", "ResourceChange": change}


RESPONSE = {
    "ChangeSetName": "deploy-42",
    "StackName": "storage",
    "Changes": [
        resource(
            "Modify",
            "DataBucket",
            "AWS::S3::Bucket",
            Replacement="True",
            BeforeContext={"Properties": {"BucketName": "data-v1"}},
            AfterContext={"Properties": {"BucketName": "data-v2"}},
            Details=[
                {
                    "Target": {
                        "Attribute": "Properties",
                        "Name": "BucketName",
                        "Path": "/Properties/BucketName",
                        "RequiresRecreation": "Always",
                    }
                },
                {
                    "Target": {
                        "Attribute": "Tags",
                        "Name": "owner",
                        "BeforeValue": "storage",
                        "AfterValue": "platform",
                    }
                },
            ],
        ),
        resource(
            "Import",
            "Table",
            "AWS::DynamoDB::Table",
            AfterContext={"Properties": {"TableName": "events"}},
        ),
    ],
}


# =============================================================================
# Main
# =============================================================================


def main() -> None:
    report = render_change_set(RESPONSE, RenderOptions())
    print(report.text())

    print("\nTotals:", report.totals.to_dict())


if __name__ == "__main__":
    main()
