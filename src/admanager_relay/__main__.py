from admanager_relay.api.main import main

main()
