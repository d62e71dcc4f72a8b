from motor.motor_asyncio import AsyncIOMotorClient
import urllib.parse
import threading
import asyncio
import weakref

# Utils
from omniconsole.utils.log_utils import LogUtil
from omniconsole.utils.environment_utils import EnvironmentUtils

COLLECTION_NAMES = (
    "tenants",
    "tenant_levels",
    "user_tenants",
    "contacts",
    "contact_lists",
    "channels",
    "channel_rates",
    "api_integrations",
    "templates",
    "flows",
    "campaigns",
    "conversations",
    "conversation_messages",
    "transactions",
)

"""
Lazily created motor clients, one per event loop
"""
class MongoClientManager:
    def __init__(self, log_util: LogUtil, environment_utils: EnvironmentUtils):

        # Initialize logger
        self.log_util = log_util

        # Initialize environment utils
        self.environment_utils = environment_utils

        # Mongo credentials
        self.username = urllib.parse.quote_plus(str(self.environment_utils.get_env_variable("MONGO_USERNAME")))
        self.password = urllib.parse.quote_plus(str(self.environment_utils.get_env_variable("MONGO_PASSWORD")))
        self.auth_source = self.environment_utils.get_env_variable("MONGO_AUTH_SOURCE")
        self.host = self.environment_utils.get_env_variable("MONGO_HOST")
        self.port = int(self.environment_utils.get_env_variable("MONGO_PORT"))
        self.db_name = self.environment_utils.get_env_variable("MONGO_DB_NAME")

        # Mongo Connection Pool Configs
        self.max_pool_size = 50
        self.min_pool_size = 0  # Create connections on-demand instead of at startup
        self.max_idle_time_ms = 30000
        self.wait_queue_timeout_ms = 10000
        self.connect_timeout_ms = 10000
        self.server_selection_timeout_ms = 10000
        self.socket_timeout_ms = 10000

        # {loop_id: {client, db, collections, loop}}
        self._clients = {}

        # Thread-safe initialization lock
        self._client_lock = threading.Lock()

    def _connection_uri(self) -> str:
        if self.username:
            return f"mongodb://{self.username}:{self.password}@{self.host}:{self.port}/?authSource={self.auth_source}"
        return f"mongodb://{self.host}:{self.port}/"

    def get_client_for_current_loop(self) -> dict:
        """
        Get the MongoDB client and collections for the current event loop.
        Returns a dictionary with 'client', 'db', and 'collections'.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            raise RuntimeError("No event loop available. Database methods must be called from an async context.")

        loop_id = id(loop)

        if loop_id in self._clients:
            return self._clients[loop_id]

        with self._client_lock:
            # Another thread might have created it while we waited
            if loop_id in self._clients:
                return self._clients[loop_id]

            client = AsyncIOMotorClient(
                self._connection_uri(),
                maxPoolSize=self.max_pool_size,
                minPoolSize=self.min_pool_size,
                maxIdleTimeMS=self.max_idle_time_ms,
                waitQueueTimeoutMS=self.wait_queue_timeout_ms,
                connectTimeoutMS=self.connect_timeout_ms,
                serverSelectionTimeoutMS=self.server_selection_timeout_ms,
                socketTimeoutMS=self.socket_timeout_ms,
                retryWrites=True,
                retryReads=True
            )
            db = client[self.db_name]

            client_data = {
                'client': client,
                'db': db,
                'collections': {name: db[name] for name in COLLECTION_NAMES},
                'loop': weakref.ref(loop)
            }
            self._clients[loop_id] = client_data

            self.log_util.info(
                service_name="MongoClientManager",
                message=f"MongoDB client initialized for event loop {loop_id} (lazy initialization)"
            )

            return client_data

    def close(self):
        """
        Close all MongoDB clients and cleanup resources
        """
        with self._client_lock:
            for loop_id, client_data in self._clients.items():
                try:
                    client_data['client'].close()
                except Exception as e:
                    self.log_util.warning(
                        service_name="MongoClientManager",
                        message=f"Error closing client for loop {loop_id}: {str(e)}"
                    )

            self._clients.clear()

            self.log_util.info(
                service_name="MongoClientManager",
                message="All MongoDB clients closed"
            )
