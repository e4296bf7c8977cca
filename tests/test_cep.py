import asyncio

import httpx

from app.services.cep_service import buscar_cep


def _client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def test_buscar_cep_combina_logradouro_e_bairro():
    def handler(request):
        assert request.url.path.endswith("/01310100/json/")
        return httpx.Response(
            200,
            json={
                "cep": "01310-100",
                "logradouro": "Avenida Paulista",
                "complemento": "",
                "bairro": "Bela Vista",
                "localidade": "São Paulo",
                "uf": "SP",
            },
        )

    async def executar():
        async with _client(handler) as client:
            return await buscar_cep("01310-100", client=client)

    resultado = asyncio.run(executar())
    assert resultado is not None
    assert resultado.rua == "Avenida Paulista, Bela Vista"
    assert resultado.uf == "SP"


def test_buscar_cep_so_bairro():
    def handler(request):
        return httpx.Response(200, json={"cep": "12345-678", "logradouro": "", "bairro": "Centro"})

    async def executar():
        async with _client(handler) as client:
            return await buscar_cep("12345678", client=client)

    assert asyncio.run(executar()).rua == "Centro"


def test_buscar_cep_inexistente():
    def handler(request):
        return httpx.Response(200, json={"erro": True})

    async def executar():
        async with _client(handler) as client:
            return await buscar_cep("99999999", client=client)

    assert asyncio.run(executar()) is None


def test_buscar_cep_erro_http():
    def handler(request):
        return httpx.Response(500)

    async def executar():
        async with _client(handler) as client:
            return await buscar_cep("01310100", client=client)

    assert asyncio.run(executar()) is None


def test_buscar_cep_falha_de_rede():
    def handler(request):
        raise httpx.ConnectError("sem rede", request=request)

    async def executar():
        async with _client(handler) as client:
            return await buscar_cep("01310100", client=client)

    assert asyncio.run(executar()) is None


def test_buscar_cep_tamanho_invalido_nao_consulta():
    chamadas = []

    def handler(request):
        chamadas.append(request)
        return httpx.Response(200, json={})

    async def executar():
        async with _client(handler) as client:
            return await buscar_cep("123", client=client)

    assert asyncio.run(executar()) is None
    assert chamadas == []
