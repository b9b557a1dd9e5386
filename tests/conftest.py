import sys
import uuid
from datetime import datetime, timedelta, timezone
from pathlib import Path
from types import SimpleNamespace

import pytest
from azure.core.exceptions import HttpResponseError, ResourceExistsError, ResourceNotFoundError
from fastapi.testclient import TestClient

# Ensure project root is on sys.path so `import app` works under pytest
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
	sys.path.insert(0, str(ROOT_DIR))

from app.services.storage_clients import StorageClients  # noqa: E402

FAKE_CONNECTION_STRING = (
	"DefaultEndpointsProtocol=https;AccountName=fakeaccount;AccountKey=ZmFrZQ==;EndpointSuffix=core.windows.net"
)


class FakeStorageAccount:
	"""In-memory stand-in for a storage account, shared by every fake client built from it."""

	def __init__(self) -> None:
		self.containers: dict[str, dict] = {}
		self.queues: dict[str, list] = {}
		self.tables: dict[str, dict] = {}
		self.shares: dict[str, dict] = {}
		self.fail_on: set[str] = set()
		self.create_calls: list[str] = []
		self.closed_clients = 0
		self.configs = []

	def _create(self, kind: str, name: str, store: dict, initial) -> None:
		label = f"{kind}:{name}"
		self.create_calls.append(label)
		if label in self.fail_on:
			raise HttpResponseError(message=f"simulated failure creating {label}")
		if name in store:
			raise ResourceExistsError(message=f"{label} already exists")
		store[name] = initial

	def make_clients(self, config=None, session=None) -> StorageClients:
		self.configs.append(config)
		return StorageClients(
			blob=FakeBlobServiceClient(self),
			queue=FakeQueueServiceClient(self),
			table=FakeTableServiceClient(self),
			share=FakeShareServiceClient(self),
		)


class _FakeServiceClient:
	def __init__(self, account: FakeStorageAccount) -> None:
		self.account = account

	async def close(self) -> None:
		self.account.closed_clients += 1


# Blob


class FakeBlobServiceClient(_FakeServiceClient):
	def get_container_client(self, name: str) -> "FakeContainerClient":
		return FakeContainerClient(self.account, name)


class FakeContainerClient:
	def __init__(self, account: FakeStorageAccount, name: str) -> None:
		self.account = account
		self.name = name

	@property
	def _blobs(self) -> dict:
		return self.account.containers[self.name]["blobs"]

	async def create_container(self, public_access=None):
		self.account._create("Blob Container", self.name, self.account.containers, {"public_access": public_access, "blobs": {}})

	def get_blob_client(self, blob: str):
		return SimpleNamespace(url=f"https://fakeaccount.blob.core.windows.net/{self.name}/{blob}")

	async def list_blobs(self, name_starts_with=None):
		for name in sorted(self._blobs):
			if name_starts_with and not name.startswith(name_starts_with):
				continue
			yield self._blobs[name]

	async def upload_blob(self, name, data, overwrite=False, content_settings=None):
		if name in self._blobs and not overwrite:
			raise ResourceExistsError(message="BlobAlreadyExists")
		self._blobs[name] = SimpleNamespace(
			name=name,
			size=len(data),
			last_modified=datetime(2024, 1, 1, tzinfo=timezone.utc),
			etag='"0x1"',
			content_settings=content_settings,
			data=data,
		)
		return self.get_blob_client(name)

	async def delete_blob(self, name):
		if name not in self._blobs:
			raise ResourceNotFoundError(message="BlobNotFound")
		del self._blobs[name]


# Queue


class FakeQueueServiceClient(_FakeServiceClient):
	def get_queue_client(self, name: str) -> "FakeQueueClient":
		return FakeQueueClient(self.account, name)


class FakeQueueClient:
	def __init__(self, account: FakeStorageAccount, name: str) -> None:
		self.account = account
		self.name = name

	async def create_queue(self):
		self.account._create("Queue", self.name, self.account.queues, [])

	async def send_message(self, content):
		now = datetime.now(timezone.utc)
		message = SimpleNamespace(
			id=uuid.uuid4().hex,
			content=content,
			inserted_on=now,
			expires_on=now + timedelta(days=7),
		)
		self.account.queues[self.name].append(message)
		return message

	async def peek_messages(self, max_messages=None):
		return list(self.account.queues[self.name][: max_messages or 1])


# Table


class FakeTableServiceClient(_FakeServiceClient):
	def get_table_client(self, table_name: str) -> "FakeTableClient":
		return FakeTableClient(self.account, table_name)


class FakeTableClient:
	def __init__(self, account: FakeStorageAccount, name: str) -> None:
		self.account = account
		self.name = name

	@property
	def _entities(self) -> dict:
		return self.account.tables[self.name]

	async def create_table(self):
		self.account._create("Table", self.name, self.account.tables, {})

	async def upsert_entity(self, entity, mode=None):
		self._entities[(entity["PartitionKey"], entity["RowKey"])] = dict(entity)
		return {}

	async def get_entity(self, partition_key, row_key):
		try:
			return dict(self._entities[(partition_key, row_key)])
		except KeyError:
			raise ResourceNotFoundError(message="ResourceNotFound") from None

	async def query_entities(self, query_filter, parameters=None):
		pk = (parameters or {}).get("pk")
		for (partition, _), entity in sorted(self._entities.items()):
			if partition == pk:
				yield dict(entity)

	async def delete_entity(self, partition_key, row_key):
		self._entities.pop((partition_key, row_key), None)


# File share


class FakeShareServiceClient(_FakeServiceClient):
	def get_share_client(self, share: str) -> "FakeShareClient":
		return FakeShareClient(self.account, share)


class FakeShareClient:
	def __init__(self, account: FakeStorageAccount, name: str) -> None:
		self.account = account
		self.name = name

	@property
	def _files(self) -> dict:
		return self.account.shares[self.name]

	async def create_share(self):
		self.account._create("File Share", self.name, self.account.shares, {})

	def get_directory_client(self, directory_path=None):
		share = self

		class _Root:
			async def list_directories_and_files(self):
				for name in sorted(share._files):
					yield {"name": name, "size": len(share._files[name]), "is_directory": False}

		return _Root()

	def get_file_client(self, file_path):
		return FakeShareFileClient(self, file_path)


class FakeShareFileClient:
	def __init__(self, share: FakeShareClient, path: str) -> None:
		self.share = share
		self.path = path

	async def upload_file(self, data):
		self.share._files[self.path] = bytes(data)

	async def download_file(self):
		if self.path not in self.share._files:
			raise ResourceNotFoundError(message="ResourceNotFound")
		data = self.share._files[self.path]

		class _Downloader:
			async def readall(self):
				return data

		return _Downloader()

	async def delete_file(self):
		if self.path not in self.share._files:
			raise ResourceNotFoundError(message="ResourceNotFound")
		del self.share._files[self.path]


@pytest.fixture
def storage_account():
	return FakeStorageAccount()


@pytest.fixture
def provisioned_account(storage_account):
	clients = storage_account.make_clients()
	names = ("product-images", "order-processing", "inventory-management", "CustomerProfiles", "contracts")
	storage_account.containers[names[0]] = {"public_access": "blob", "blobs": {}}
	storage_account.queues[names[1]] = []
	storage_account.queues[names[2]] = []
	storage_account.tables[names[3]] = {}
	storage_account.shares[names[4]] = {}
	return storage_account, clients


@pytest.fixture
def storage_env(monkeypatch):
	monkeypatch.delenv("ConnectionStrings__AzureStorage", raising=False)
	monkeypatch.setenv("AZURE_STORAGE_CONNECTION_STRING", FAKE_CONNECTION_STRING)


@pytest.fixture
def make_client(storage_account, storage_env):
	"""Build a TestClient over a fresh app; use it as a context manager to run startup."""

	from app.main import create_app
	from app.services.config import AppConfig

	def _make(
		environment: str = "Production",
		controllers=None,
		base_url: str = "https://testserver",
		raise_server_exceptions: bool = True,
	) -> TestClient:
		app = create_app(
			AppConfig(environment=environment),
			storage_clients_factory=storage_account.make_clients,
			controllers=controllers,
		)
		return TestClient(
			app,
			base_url=base_url,
			follow_redirects=False,
			raise_server_exceptions=raise_server_exceptions,
		)

	return _make


@pytest.fixture
def app_client(make_client):
	with make_client() as client:
		yield client
