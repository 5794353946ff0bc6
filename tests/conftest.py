"""Pytest configuration and fixtures."""

import json
import os

import httpx
import pytest

# Set environment variables before imports
os.environ["TABLE_NAME"] = "pagecraft-test"
os.environ["PAGECRAFT_API_URL"] = "http://testserver"
os.environ["AWS_DEFAULT_REGION"] = "us-east-1"
os.environ["AWS_ACCESS_KEY_ID"] = "testing"
os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"


@pytest.fixture
def aws_credentials():
    """Mock AWS credentials for moto."""
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "us-east-1"


@pytest.fixture
def dynamodb_table(aws_credentials):
    """Create mocked DynamoDB table."""
    import boto3
    from moto import mock_aws

    with mock_aws():
        dynamodb = boto3.resource("dynamodb", region_name="us-east-1")

        table = dynamodb.create_table(
            TableName="pagecraft-test",
            KeySchema=[
                {"AttributeName": "PK", "KeyType": "HASH"},
                {"AttributeName": "SK", "KeyType": "RANGE"},
            ],
            AttributeDefinitions=[
                {"AttributeName": "PK", "AttributeType": "S"},
                {"AttributeName": "SK", "AttributeType": "S"},
            ],
            BillingMode="PAY_PER_REQUEST",
        )

        table.wait_until_exists()

        yield table


@pytest.fixture
def settings():
    """Editor settings with short timers for async tests."""
    from pagecraft.config import EditorSettings

    return EditorSettings(
        api_url="http://testserver",
        autosave_debounce_seconds=0.05,
        autosave_saved_display_seconds=0.05,
        lock_poll_interval_seconds=0.05,
    )


@pytest.fixture
def sample_blocks():
    """Create a small block sequence."""
    from pagecraft.models.block import Block

    return [
        Block(id="hero0001", type="hero", data={"image": "", "alt": "", "title": "Dubai Frame"}, order=0),
        Block(id="text0001", type="text", data={"contents": "A picture frame over the city."}, order=1),
        Block(id="faq00001", type="faq", data={"question": "", "answer": ""}, order=2),
    ]


@pytest.fixture
def sample_document(sample_blocks):
    """Create a sample draft document."""
    from pagecraft.models.document import Document

    return Document(
        id="doc-123",
        title="Dubai Frame Visitor Guide",
        primary_keyword="dubai frame",
        blocks=sample_blocks,
    )


class FakeContentApi:
    """In-process content API served through httpx.MockTransport."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.failing: set[str] = set()
        self.lock = {"isLocked": False}
        self.versions: list[dict] = []
        self.restored: dict | None = None
        self.section: dict = {}
        self.seo = {"canPublish": True, "overallScore": 90, "fixableIssuesCount": 0}

    def bodies(self, method: str, path: str) -> list[dict]:
        """JSON bodies of the requests sent to an endpoint."""
        return [
            json.loads(request.content)
            for request in self.requests
            if request.method == method and request.url.path == path
        ]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if any(path.startswith(prefix) for prefix in self.failing):
            return httpx.Response(500, json={"error": "Internal error"})

        if path.startswith("/api/contents-locks/"):
            return httpx.Response(200, json=self.lock)
        if path == "/api/seo/validate":
            return httpx.Response(200, json=self.seo)
        if path == "/api/ai/generate-section":
            return httpx.Response(200, json=self.section)
        if path.endswith("/restore"):
            if self.restored is None:
                return httpx.Response(404, json={"error": "Version not found"})
            return httpx.Response(200, json=self.restored)
        if path.endswith("/versions"):
            return httpx.Response(200, json=self.versions)
        if request.method == "PATCH" and path.startswith("/api/contents/"):
            body = json.loads(request.content)
            return httpx.Response(200, json={"id": path.rsplit("/", 1)[-1], **body})

        return httpx.Response(404, json={"error": "Not found"})


@pytest.fixture
def content_api():
    """Fake content API."""
    return FakeContentApi()


@pytest.fixture
def http_client(content_api):
    """AsyncClient wired to the fake content API."""
    return httpx.AsyncClient(
        base_url="http://testserver",
        transport=httpx.MockTransport(content_api.handler),
    )
