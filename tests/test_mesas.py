from conftest import API


def test_configurar_mesas(client, auth_headers):
    resposta = client.post(f"{API}/mesas/configurar", json={"quantidade": 5}, headers=auth_headers)
    assert resposta.status_code == 200
    corpo = resposta.json()
    assert corpo["total"] == 5
    assert corpo["livres"] == 5
    assert [m["numero"] for m in corpo["mesas"]] == [1, 2, 3, 4, 5]
    assert all(m["capacidade"] == 4 for m in corpo["mesas"])

    # Reconfigurar substitui as mesas existentes
    resposta = client.post(f"{API}/mesas/configurar", json={"quantidade": 2}, headers=auth_headers)
    assert resposta.json()["total"] == 2


def test_configurar_quantidade_invalida(client, auth_headers):
    for quantidade in (0, 101):
        resposta = client.post(f"{API}/mesas/configurar", json={"quantidade": quantidade}, headers=auth_headers)
        assert resposta.status_code == 400
        assert "entre 1 e 100" in resposta.json()["detail"]


def test_reservar_e_liberar(client, auth_headers):
    client.post(f"{API}/mesas/configurar", json={"quantidade": 3}, headers=auth_headers)

    resposta = client.put(f"{API}/mesas/2/status", json={"status": "reservada"}, headers=auth_headers)
    assert resposta.status_code == 200
    assert resposta.json()["status"] == "reservada"

    resposta = client.put(f"{API}/mesas/2/status", json={"status": "livre"}, headers=auth_headers)
    assert resposta.json()["status"] == "livre"


def test_ocupar_manualmente_e_recusado(client, auth_headers):
    client.post(f"{API}/mesas/configurar", json={"quantidade": 3}, headers=auth_headers)
    resposta = client.put(f"{API}/mesas/1/status", json={"status": "ocupada"}, headers=auth_headers)
    assert resposta.status_code == 400


def test_mesa_inexistente(client, auth_headers):
    resposta = client.put(f"{API}/mesas/9/status", json={"status": "reservada"}, headers=auth_headers)
    assert resposta.status_code == 404


def test_remover_todas(client, auth_headers):
    client.post(f"{API}/mesas/configurar", json={"quantidade": 4}, headers=auth_headers)
    resposta = client.delete(f"{API}/mesas/", headers=auth_headers)
    assert resposta.json() == {"removidas": 4}
    assert client.get(f"{API}/mesas/", headers=auth_headers).json()["total"] == 0


def test_mesas_sao_de_cada_usuario(client, auth_headers):
    from conftest import cadastrar_e_logar

    client.post(f"{API}/mesas/configurar", json={"quantidade": 4}, headers=auth_headers)
    outro = cadastrar_e_logar(client, email="outro@restaurante.com.br")
    assert client.get(f"{API}/mesas/", headers=outro).json()["total"] == 0
