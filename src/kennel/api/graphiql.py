"""
GraphiQL IDE page served from the GraphQL endpoint
"""

import json
from string import Template

_GRAPHIQL_TEMPLATE = Template("""<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Kennel GraphiQL</title>
    <style>
      body { margin: 0; height: 100vh; }
      #graphiql { height: 100vh; }
    </style>
    <link rel="stylesheet" href="https://unpkg.com/graphiql@3/graphiql.min.css" />
  </head>
  <body>
    <div id="graphiql">Loading...</div>
    <script crossorigin src="https://unpkg.com/react@18/umd/react.production.min.js"></script>
    <script
      crossorigin
      src="https://unpkg.com/react-dom@18/umd/react-dom.production.min.js"
    ></script>
    <script crossorigin src="https://unpkg.com/graphiql@3/graphiql.min.js"></script>
    <script>
      const fetcher = GraphiQL.createFetcher({ url: $endpoint });
      const root = ReactDOM.createRoot(document.getElementById("graphiql"));
      root.render(
        React.createElement(GraphiQL, { fetcher, defaultEditorToolbarOpen: true })
      );
    </script>
  </body>
</html>
""")


def render_graphiql(endpoint: str) -> str:
    """Render the GraphiQL page pointed at ``endpoint``."""
    return _GRAPHIQL_TEMPLATE.substitute(endpoint=json.dumps(endpoint))


def wants_html(accept: str | None) -> bool:
    """True when an Accept header prefers an HTML page (a browser)."""
    if not accept:
        return False
    return "text/html" in accept
