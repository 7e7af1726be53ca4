"""Fixed texts used in log records and raised errors."""


class ErrorMessages:
    """Texts describing failures."""

    HOST_NAME_NOT_FOUND = "Hostname not found inside the server configuration"
    KEY_NOT_FOUND = "not found inside the configuration data structure"
    SERVER_NAME_NOT_FOUND = "server_name not configured"
    E_SOCK_INIT = "error during socket initialization: "
    E_BAD_ARG = "invalid argument"
    E_BAD_IP = "invalid ip address"
    E_BAD_TYPE = "invalid type"
    E_BAD_ROUTE = "invalid route"
    E_EPOLL_INIT = "error during epoll instance initialization"
    E_EPOLL_CTL_ADD = "error when registering new fd in epoll's interest list"
    E_EPOLL_CTL_MOD = "error when modifying epoll's interest list"
    E_EPOLL_CTL_DEL = "error when deleting new fd in epoll's interest list"
    E_EPOLL_WAIT = "error when waiting for events"
    E_INSERT_MAP = "error when inserting new map entry"
    E_CONN_EXIST = "connexion already in use"


class SuccessMessages:
    """Texts describing successful operations."""

    HOST_NAME_FOUND = "found inside configuration"
    SOCK_INIT = "Socket(s) initialization succesfull"
    KEY_FOUND = "Key found inside the configuration"
    S_EPOLL_CTL_ADD = "New entry successfuly added to epoll's interest list"
    S_EPOLL_CTL_MOD = "Epoll's interest list modified successfuly"
    S_EPOLL_CTL_DEL = "Entry successfuly deleted from epoll's interest list"
    S_MAP_ERASE = "Map entry deleted"