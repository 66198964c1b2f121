from storefront.cli.admin import app

app(prog_name="storefront")
