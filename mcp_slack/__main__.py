from mcp_slack import main

main()
