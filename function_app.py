import logging

import azure.functions as func

import get_sas_token

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = func.FunctionApp(http_auth_level=func.AuthLevel.FUNCTION)


@app.function_name(name="GetSasToken")
@app.route(route="GetSasToken", methods=["POST"])
def get_sas_token_http(req: func.HttpRequest) -> func.HttpResponse:
    return get_sas_token.main(req)
