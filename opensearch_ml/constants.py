DEFAULT_NETWORK_TIMEOUT_SEC = 120
DEFAULT_POLL_INTERVAL_SEC = 2
DEFAULT_POLL_TIMEOUT_SEC = 15 * 60

JSON_CONTENT_TYPE = "application/json"
JSON_HEADERS = {
    "Content-Type": JSON_CONTENT_TYPE,
    "Accept": JSON_CONTENT_TYPE,
}

ML_PLUGIN_ROUTE = "_plugins/_ml"
MODEL_GROUPS_ROUTE = f"{ML_PLUGIN_ROUTE}/model_groups"
CONNECTORS_ROUTE = f"{ML_PLUGIN_ROUTE}/connectors"
MODELS_ROUTE = f"{ML_PLUGIN_ROUTE}/models"
TASKS_ROUTE = f"{ML_PLUGIN_ROUTE}/tasks"

MODEL_GROUP_REGISTER_ROUTE = f"{MODEL_GROUPS_ROUTE}/_register"
CONNECTOR_CREATE_ROUTE = f"{CONNECTORS_ROUTE}/_create"
MODEL_REGISTER_ROUTE = f"{MODELS_ROUTE}/_register?deploy=true"

CONNECTOR_ID_KEY = "connector_id"
DESCRIPTION_KEY = "description"
MODEL_GROUP_ID_KEY = "model_group_id"
NAME_KEY = "name"
TASK_ID_KEY = "task_id"

ADDRESS_ENV = "OPENSEARCH_ADDRESS"
USERNAME_ENV = "OPENSEARCH_USERNAME"
PASSWORD_ENV = "OPENSEARCH_PASSWORD"
INSECURE_ENV = "OPENSEARCH_INSECURE"
NETWORK_TIMEOUT_ENV = "OPENSEARCH_NETWORK_TIMEOUT"
POLL_INTERVAL_ENV = "OPENSEARCH_ML_POLL_INTERVAL"
POLL_TIMEOUT_ENV = "OPENSEARCH_ML_POLL_TIMEOUT"
