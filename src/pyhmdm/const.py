"""Constants for pyhmdm."""

# Adapter whose objects are managed
DEFAULT_ADAPTER = "hm-rpc"
DEFAULT_INSTANCE = 0

# Display language used when the system configuration does not declare one
DEFAULT_LANGUAGE = "en"
SYSTEM_CONFIG_ID = "system.config"

DEFAULT_MANUFACTURER = "EQ-3 AG"

# Channel index holding the device level diagnostic states
INFO_CHANNEL_SUFFIX = ".0"

# Diagnostic states below <device>.0
STATE_UNREACH = "UNREACH"
STATE_RSSI_DEVICE = "RSSI_DEVICE"
STATE_LOWBAT = "LOWBAT"
STATE_SABOTAGE = "SABOTAGE"

CONNECTION_CONNECTED = "connected"
CONNECTION_DISCONNECTED = "disconnected"
WARNING_SABOTAGE = "Sabotage"

# Structured binding failure
ERROR_CODE_NO_STATE = 305
ERROR_MESSAGE_NO_STATE = "Can not get current state"
ERROR_DEVICE_NOT_FOUND = "Device not found"

# Label prefix of momentary keys (PRESS_SHORT, PRESS_LONG, ...)
PRESS_PREFIX = "PRESS "
ROLE_BUTTON = "button"

# Rename action
ACTION_RENAME = "rename"
ACTION_RENAME_ICON = "fa-solid fa-pen"
RENAME_DESCRIPTION = {
    "en": "Rename this device",
    "de": "Gerät umbenennen",
    "ru": "Переименовать это устройство",
    "pt": "Renomear este dispositivo",
    "nl": "Hernoem dit apparaat",
    "fr": "Renommer cet appareil",
    "it": "Rinomina questo dispositivo",
    "es": "Renombrar este dispositivo",
    "pl": "Zmień nazwę tego urządzenia",
    "zh-cn": "重命名此设备",
    "uk": "Перейменуйте цей пристрій",
}
RENAME_TITLE = {
    "en": "Enter new name",
    "de": "Neuen Namen eingeben",
    "ru": "Введите новое имя",
    "pt": "Digite um novo nome",
    "nl": "Voer een nieuwe naam in",
    "fr": "Entrez un nouveau nom",
    "it": "Inserisci un nuovo nome",
    "es": "Ingrese un nuevo nombre",
    "pl": "Wpisz nowe imię",
    "zh-cn": "输入新名称",
    "uk": "Введіть нове ім'я",
}

# REST API (ioBroker rest-api adapter)
DEFAULT_BASE_URL = "http://localhost:8093"
OBJECTS_ENDPOINT = "/v1/objects"
OBJECT_ENDPOINT = "/v1/object/"
STATE_ENDPOINT = "/v1/state/"
DEFAULT_TIMEOUT = 15

# OAuth2 endpoint of the ioBroker web server
TOKEN_ENDPOINT = "/oauth/token"
DEFAULT_CLIENT_ID = "ioBroker"
TOKEN_EXPIRY_SKEW = 60
