EIP_CID = "QmRAQB6YaCyidP37UdDnjFY5vQuiBrcqdyoW1CuDgwxkD4"
EIP_CID_V1 = "bafybeibj6lixxzqtsb45ysdjnupvqkufgdvzqbnvmhw2kf7cfkesy7r7d4"
EIP_CONTENT_HASH = "0xe3010170122029f2d17be6139079dc48696d1f582a8530eb9805b561eda517e22a892c7e3f1f"

CIDV1 = "bafybeihkoviema7g3gxyt6la7v4mbgn2wh5qoxmkvqmv7k7n7qlomg4elu"
RAW_CONTENT_HASH = "0xe301015512205822b241e505ef8acd4f11512cb8fb480b20b156a028b3d53acdcf3e01df1ea3"
RAW_CID = "bafkreicyekzedzif56fm2tyrkewlr62ibmqlcvvafcz5kownz47adxy6um"


class TestGetContentHash:
    def test_cidv0(self, client):
        response = client.get(f"/contenthash/{EIP_CID}")
        assert response.status_code == 200
        assert response.get_json() == {
            "cid": EIP_CID,
            "version": "v0",
            "codec": "dag-pb",
            "hash_function": "sha2-256",
            "digest_length": 32,
            "contenthash": EIP_CONTENT_HASH,
        }

    def test_cidv1(self, client):
        data = client.get(f"/contenthash/{CIDV1}").get_json()
        assert data["version"] == "v1"
        assert data["contenthash"].startswith("0xe30101701220")

    def test_invalid_character(self, client):
        bad = EIP_CID[:-1] + "0"
        response = client.get(f"/contenthash/{bad}")
        assert response.status_code == 400
        data = response.get_json()
        assert data["error"] == "invalid_character"
        assert data["cid"] == bad

    def test_unrecognized(self, client):
        response = client.get("/contenthash/invalid")
        assert response.status_code == 400
        assert response.get_json()["error"] == "unrecognized_cid_format"

    def test_repeated_requests_use_cache(self, client):
        from contenthash_api import _cached_encode

        client.get(f"/contenthash/{CIDV1}")
        client.get(f"/contenthash/{CIDV1}")
        assert _cached_encode.cache_info().hits >= 1


class TestBatch:
    def test_mixed_batch(self, client):
        cids = [EIP_CID, CIDV1, EIP_CID, "invalid"]
        response = client.post("/contenthash/batch", json={"cids": cids})
        assert response.status_code == 200
        data = response.get_json()
        assert data["total_requested"] == 4
        assert data["total_encoded"] == 2
        assert data["total_failed"] == 1
        assert data["results"][EIP_CID]["contenthash"] == EIP_CONTENT_HASH
        assert data["errors"]["invalid"]["error"] == "unrecognized_cid_format"

    def test_empty_batch(self, client):
        data = client.post("/contenthash/batch", json={"cids": []}).get_json()
        assert data["results"] == {}
        assert data["total_requested"] == 0

    def test_requires_json(self, client):
        response = client.post("/contenthash/batch", data="cids=Qm")
        assert response.status_code == 400

    def test_missing_cids(self, client):
        response = client.post("/contenthash/batch", json={"hashes": []})
        assert response.status_code == 400

    def test_cids_must_be_strings(self, client):
        assert client.post("/contenthash/batch", json={"cids": "Qm"}).status_code == 400
        assert client.post("/contenthash/batch", json={"cids": [1, 2]}).status_code == 400

    def test_batch_size_limit(self, client, max_batch_size):
        max_batch_size["MAX_BATCH_SIZE"] = 2
        response = client.post("/contenthash/batch", json={"cids": [CIDV1] * 3})
        assert response.status_code == 400
        assert response.get_json()["received"] == 3


class TestDecode:
    def test_decode_dag_pb(self, client):
        response = client.get(f"/contenthash/decode/{EIP_CONTENT_HASH}")
        assert response.status_code == 200
        data = response.get_json()
        assert data["namespace"] == "ipfs"
        assert data["cid"] == EIP_CID_V1
        assert data["cidv0"] == EIP_CID
        assert data["codec"] == "dag-pb"

    def test_decode_raw_has_no_v0_form(self, client):
        data = client.get(f"/contenthash/decode/{RAW_CONTENT_HASH}").get_json()
        assert data["cid"] == RAW_CID
        assert "cidv0" not in data

    def test_decode_sentinel(self, client):
        data = client.get("/contenthash/decode/0x").get_json()
        assert data["cid"] is None

    def test_decode_invalid(self, client):
        response = client.get("/contenthash/decode/0xzz")
        assert response.status_code == 400
        assert response.get_json()["error"] == "invalid_content_hash"


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.get_json() == {"status": "ok"}
