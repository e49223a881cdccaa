from mcp_server_jj import main

main()
