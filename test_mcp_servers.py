"""Tests for the category pricing servers against the bundled catalog."""

import unittest


def bundled_loader():
    from oci_pricing_mcp.data.loader import PricingDataLoader
    return PricingDataLoader()


class TestComputeServer(unittest.TestCase):

    def setUp(self):
        from oci_pricing_mcp.mcp_servers.compute_server import ComputeServer
        self.server = ComputeServer(bundled_loader())

    def test_list_without_filters_returns_all(self):
        result = self.server.list_compute_shapes()
        self.assertEqual(result["total_count"], len(self.server.loader.get_compute_pricing()))
        self.assertIn("free_tier_note", result)

    def test_list_is_idempotent(self):
        self.assertEqual(self.server.list_compute_shapes(family="E5"), self.server.list_compute_shapes(family="E5"))

    def test_list_filters(self):
        arm = self.server.list_compute_shapes(family="A1.Flex")
        self.assertEqual([s["shape_family"] for s in arm["shapes"]], ["VM.Standard.A1.Flex"])
        cheap = self.server.list_compute_shapes(max_ocpu_price=0.02)
        self.assertTrue(all(s["ocpu_price"] <= 0.02 for s in cheap["shapes"]))
        gpu = self.server.list_compute_shapes(type="gpu")
        self.assertTrue(gpu["shapes"])
        self.assertTrue(all("GPU" in s["shape_family"] for s in gpu["shapes"]))

    def test_e5_flex_four_ocpu(self):
        result = self.server.calculate_compute_cost("VM.Standard.E5.Flex", 4, 32)
        self.assertEqual(result["status"], "priced")
        totals = [li["monthly_total"] for li in result["breakdown"]]
        self.assertEqual(totals, [87.6, 46.72])
        self.assertEqual(result["total_monthly"], round(sum(totals), 2))
        self.assertEqual(result["total_monthly"], 134.32)

    def test_partial_hours_scale_and_note(self):
        result = self.server.calculate_compute_cost("VM.Standard.E5.Flex", 4, 32, hours_per_month=160)
        self.assertEqual([li["monthly_total"] for li in result["breakdown"]], [19.2, 10.24])
        self.assertTrue(any("not 24/7" in n for n in result["notes"]))

    def test_lookup_is_case_insensitive(self):
        result = self.server.calculate_compute_cost("vm.standard.e5.flex", 1, 8)
        self.assertEqual(result["status"], "priced")

    def test_unknown_shape(self):
        result = self.server.calculate_compute_cost("VM.Imaginary.Z9", 2, 16)
        self.assertEqual(result["status"], "not_found")
        self.assertEqual(result["breakdown"], [])
        self.assertEqual(result["total_monthly"], 0)
        self.assertEqual(len(result["notes"]), 1)

    def test_ratio_warning(self):
        result = self.server.calculate_compute_cost("VM.Optimized3.Flex", 2, 64)
        self.assertTrue(any("ratio" in n for n in result["notes"]))

    def test_instance_count_multiplies(self):
        one = self.server.calculate_compute_cost("VM.Standard.E4.Flex", 2, 16)
        three = self.server.calculate_compute_cost("VM.Standard.E4.Flex", 2, 16, instance_count=3)
        self.assertAlmostEqual(three["total_monthly"], one["total_monthly"] * 3, places=2)

    def test_shape_details(self):
        details = self.server.get_compute_shape_details("VM.Standard.A1.Flex")
        self.assertEqual(details["shape"]["shape_family"], "VM.Standard.A1.Flex")
        self.assertTrue(details["monthly_estimates"])
        missing = self.server.get_compute_shape_details("VM.Standard.E5")
        self.assertIsNone(missing["shape"])

    def test_compare_shapes(self):
        result = self.server.compare_compute_shapes(["VM.Standard.E5.Flex", "VM.Standard.A1.Flex", "nope"])
        self.assertEqual(result["cheapest"], "VM.Standard.A1.Flex")
        self.assertEqual(result["not_found"], ["nope"])
        costs = [c["monthly_cost"] for c in result["comparison"]]
        self.assertEqual(costs, sorted(costs))


class TestStorageServer(unittest.TestCase):

    def setUp(self):
        from oci_pricing_mcp.mcp_servers.storage_server import StorageServer
        self.server = StorageServer(bundled_loader())

    def test_list_all_and_filtered(self):
        self.assertEqual(self.server.list_storage_options()["total_count"],
                         len(self.server.loader.get_storage_pricing()))
        block = self.server.list_storage_options(type="block")
        self.assertEqual(block["total_count"], 4)

    def test_calculate_storage(self):
        result = self.server.calculate_storage_cost(block_volume_gb=1000, object_storage_gb=1000)
        self.assertEqual([li["monthly_total"] for li in result["breakdown"]], [42.5, 25.5])
        self.assertEqual(result["total_monthly"], 68.0)

    def test_performance_tier(self):
        result = self.server.calculate_storage_cost(block_volume_gb=100, block_performance_tier="ultra")
        self.assertEqual(result["breakdown"][0]["unit_price"], 0.0765)

    def test_archive_tier_retention_note(self):
        result = self.server.calculate_storage_cost(object_storage_gb=1000, object_storage_tier="archive")
        self.assertEqual(result["total_monthly"], 2.6)
        self.assertTrue(any("90-day" in n for n in result["notes"]))

    def test_nothing_requested_is_free(self):
        self.assertEqual(self.server.calculate_storage_cost()["status"], "free")

    def test_compare_tiers_sorted(self):
        result = self.server.compare_storage_tiers(1000)
        self.assertEqual(result["cheapest"], "object-storage-archive")
        totals = [t["monthly_total"] for t in result["tiers"]]
        self.assertEqual(totals, sorted(totals))


class TestDatabaseServer(unittest.TestCase):

    def setUp(self):
        from oci_pricing_mcp.mcp_servers.database_server import DatabaseServer
        self.server = DatabaseServer(bundled_loader())

    def test_list_filters(self):
        autonomous = self.server.list_database_options(type="autonomous")
        self.assertTrue(all("autonomous" in d["type"] for d in autonomous["options"]))
        byol = self.server.list_database_options(license_type="byol")
        self.assertTrue(all(d["byol"] for d in byol["options"]))

    def test_license_included_reports_savings(self):
        result = self.server.calculate_database_cost("autonomous-transaction-processing", 2, 100)
        self.assertEqual(result["total_monthly"], 502.12)
        self.assertEqual(result["savings"]["byol_monthly"], 129.38)
        self.assertEqual(result["savings"]["byol_savings"], 372.74)

    def test_byol_has_no_savings(self):
        result = self.server.calculate_database_cost(
            "autonomous-transaction-processing", 2, 100, license_type="byol"
        )
        self.assertEqual(result["total_monthly"], 129.38)
        self.assertNotIn("savings", result)
        self.assertTrue(any("BYOL" in n for n in result["notes"]))

    def test_type_without_byol_variant(self):
        result = self.server.calculate_database_cost("mysql", 2, 100)
        self.assertEqual(result["status"], "priced")
        self.assertNotIn("savings", result)

    def test_base_db_alias(self):
        result = self.server.calculate_database_cost("base-db", 1)
        self.assertIn("OCPU", result["breakdown"][0]["item"])

    def test_unknown_database(self):
        result = self.server.calculate_database_cost("cassandra", 2, 100)
        self.assertEqual(result["status"], "not_found")
        self.assertEqual(len(result["notes"]), 1)
        self.assertEqual(result["total_monthly"], 0)

    def test_compare_workload(self):
        result = self.server.compare_database_options("oltp")
        types = {o["database_type"] for o in result["options"]}
        self.assertIn("autonomous-transaction-processing", types)
        estimates = [o["monthly_estimate"] for o in result["options"]]
        self.assertEqual(estimates, sorted(estimates))


class TestNetworkingServer(unittest.TestCase):

    def setUp(self):
        from oci_pricing_mcp.mcp_servers.networking_server import NetworkingServer
        self.server = NetworkingServer(bundled_loader())

    def test_egress_allowance_boundary(self):
        at_limit = self.server.calculate_networking_cost(outbound_data_gb=10240)
        self.assertEqual(at_limit["total_monthly"], 0)
        self.assertEqual(at_limit["status"], "free")
        one_over = self.server.calculate_networking_cost(outbound_data_gb=10241)
        self.assertEqual(one_over["breakdown"][0]["quantity"], 1)
        self.assertEqual(one_over["breakdown"][0]["monthly_total"], round(0.0085 * 1, 2))

    def test_first_load_balancer_and_bandwidth_free(self):
        result = self.server.calculate_networking_cost(flexible_load_balancers=1, load_balancer_bandwidth_mbps=10)
        self.assertEqual(result["total_monthly"], 0)

    def test_second_load_balancer_billed(self):
        result = self.server.calculate_networking_cost(flexible_load_balancers=2, load_balancer_bandwidth_mbps=100)
        lb, bandwidth = result["breakdown"]
        self.assertEqual(lb["quantity"], 1)
        self.assertEqual(lb["monthly_total"], round(0.0113 * 730, 2))
        self.assertEqual(bandwidth["quantity"], 190)
        self.assertEqual(bandwidth["monthly_total"], round(0.0001 * 190 * 730, 2))

    def test_fastconnect_port(self):
        result = self.server.calculate_networking_cost(fast_connect_gbps=10)
        self.assertEqual(result["total_monthly"], round(1.275 * 730, 2))

    def test_list_by_type(self):
        result = self.server.list_networking_options(type="fastconnect")
        self.assertEqual(result["total_count"], 3)

    def test_compare_egress(self):
        result = self.server.compare_data_egress(20000)
        oci = result["comparison"][0]
        self.assertEqual(oci["provider"], "OCI")
        self.assertEqual(oci["monthly_cost"], round((20000 - 10240) * 0.0085, 2))
        self.assertGreater(result["savings_vs_aws"], 0)


class TestKubernetesServer(unittest.TestCase):

    def setUp(self):
        from oci_pricing_mcp.mcp_servers.kubernetes_server import KubernetesServer
        self.server = KubernetesServer(bundled_loader())

    def test_list_by_cluster_type(self):
        result = self.server.list_kubernetes_options(cluster_type="virtual-nodes")
        self.assertEqual(result["total_count"], 2)

    def test_basic_cluster_is_free(self):
        result = self.server.calculate_kubernetes_cost(cluster_type="basic")
        self.assertEqual(result["total_monthly"], 0)
        self.assertEqual(result["status"], "free")

    def test_enhanced_cluster_with_nodes(self):
        result = self.server.calculate_kubernetes_cost(
            cluster_type="enhanced", node_count=3, node_ocpus=2, node_memory_gb=16
        )
        items = {li["item"]: li["monthly_total"] for li in result["breakdown"]}
        self.assertEqual(items["OKE enhanced cluster management"], 73.0)
        nodes = round(0.03 * 6 * 730, 2) + round(0.002 * 48 * 730, 2)
        self.assertAlmostEqual(result["total_monthly"], round(73.0 + nodes, 2), places=2)

    def test_virtual_nodes(self):
        result = self.server.calculate_kubernetes_cost(
            cluster_type="virtual-nodes", virtual_nodes={"pod_ocpus": 4, "pod_memory_gb": 16}
        )
        items = {li["item"]: li["monthly_total"] for li in result["breakdown"]}
        self.assertEqual(items["Virtual node pod OCPUs"], round(0.025 * 4 * 730, 2))
        self.assertEqual(items["Virtual node pod memory"], round(0.0015 * 16 * 730, 2))

    def test_unknown_node_shape(self):
        result = self.server.calculate_kubernetes_cost(node_count=2, node_shape="VM.Nope")
        self.assertEqual(result["status"], "not_found")
        self.assertEqual(len(result["notes"]), 1)

    def test_compare_providers(self):
        result = self.server.compare_kubernetes_providers(node_count=3, node_ocpus=2, node_memory_gb=16)
        providers = {p["provider"]: p for p in result["comparison"]}
        self.assertEqual(set(providers), {"OCI OKE (basic)", "OCI OKE (enhanced)", "AWS EKS", "Azure AKS", "Google GKE"})
        self.assertEqual(result["configuration"]["vcpus_total"], 12)
        eks = providers["AWS EKS"]
        self.assertEqual(eks["nodes"], round((12 * 0.048 + 48 * 0.006) * 730, 2))
        self.assertEqual(eks["control_plane"], 73.0)
        self.assertEqual(providers["Azure AKS"]["control_plane"], 0.0)
        self.assertEqual(result["cheapest"], "OCI OKE (basic)")


class TestMulticloudServer(unittest.TestCase):

    def setUp(self):
        from oci_pricing_mcp.mcp_servers.multicloud_server import MulticloudServer
        self.server = MulticloudServer(bundled_loader())

    def test_list_group_filter(self):
        result = self.server.list_multicloud_databases(database_type="exadata")
        self.assertEqual({d["database_type"] for d in result["databases"]}, {"exadata", "exascale"})

    def test_list_provider_filter_excludes_unavailable(self):
        result = self.server.list_multicloud_databases(provider="aws")
        types = {d["database_type"] for d in result["databases"]}
        self.assertNotIn("exascale", types)
        self.assertNotIn("base-db", types)
        for db in result["databases"]:
            self.assertTrue(all(p["provider"] == "aws" for p in db.get("pricing", [])))

    def test_availability_matrix(self):
        result = self.server.get_multicloud_availability()
        self.assertEqual(result["summary"]["azure"], "5/5 products available")
        exascale = next(r for r in result["matrix"] if r["database_type"] == "exascale")
        self.assertEqual((exascale["azure"], exascale["aws"], exascale["gcp"]), (True, False, False))

    def test_calculate_available(self):
        result = self.server.calculate_multicloud_database_cost("azure", "autonomous-serverless", 2, 100)
        self.assertEqual(result["status"], "priced")
        self.assertEqual(result["total_monthly"], 502.12)
        self.assertEqual(result["multicloud_brand"], "Oracle Database@Azure")

    def test_calculate_byol(self):
        result = self.server.calculate_multicloud_database_cost(
            "gcp", "base-db", 2, 100, license_type="byol"
        )
        self.assertEqual(result["breakdown"][0]["unit_price"], 0.1935)
        self.assertIn("OCPU", result["breakdown"][0]["item"])

    def test_calculate_unavailable(self):
        result = self.server.calculate_multicloud_database_cost("aws", "exascale", 2, 100)
        self.assertEqual(result["status"], "not_found")
        self.assertFalse(result["available"])
        self.assertEqual(result["total_monthly"], 0)
        self.assertEqual(len(result["notes"]), 1)

    def test_compare_lists_unavailable_provider(self):
        result = self.server.compare_multicloud_vs_oci("autonomous-dedicated", 2, 100)
        rows = result["comparison"]
        self.assertEqual([r["provider"] for r in rows],
                         ["OCI", "Microsoft Azure", "Amazon Web Services", "Google Cloud Platform"])
        aws = rows[2]
        self.assertFalse(aws["available"])
        self.assertEqual(aws["monthly_estimate"], 0)
        self.assertEqual(aws["vs_oci"], "N/A")
        self.assertEqual(rows[1]["vs_oci"], "same price (price parity)")
        self.assertTrue(result["key_differences"])

    def test_reference_price_falls_back_to_default(self):
        compute, storage, source = self.server.reference_prices("unknown-db")
        self.assertEqual((compute, storage, source), (0.1, 0.0255, "default"))


class TestServicesServer(unittest.TestCase):

    def setUp(self):
        from oci_pricing_mcp.mcp_servers.services_server import ServicesServer
        self.server = ServicesServer(bundled_loader())

    def test_every_lister_returns_full_category(self):
        listers = {
            "ai-ml": self.server.list_ai_ml_services,
            "observability": self.server.list_observability_services,
            "integration": self.server.list_integration_services,
            "security": self.server.list_security_services,
            "analytics": self.server.list_analytics_services,
            "developer": self.server.list_developer_services,
            "media": self.server.list_media_services,
            "vmware": self.server.list_vmware_services,
            "edge": self.server.list_edge_services,
            "governance": self.server.list_governance_services,
            "exadata": self.server.list_exadata_services,
            "cache": self.server.list_cache_services,
            "disaster-recovery": self.server.list_disaster_recovery_services,
            "additional": self.server.list_additional_services,
        }
        counts = self.server.loader.get_service_category_counts()
        for category, lister in listers.items():
            result = lister()
            self.assertEqual(result["total_count"], counts[category], category)
            self.assertIn("notes", result)

    def test_ai_ml_model_filter(self):
        result = self.server.list_ai_ml_services(model="llama")
        self.assertEqual(result["total_count"], 2)
        self.assertTrue(all("llama" in m for m in result["available_models"]))

    def test_free_allowance_sections(self):
        self.assertIn("free_allowances", self.server.list_observability_services())
        self.assertIn("free_services", self.server.list_security_services())

    def test_calculate_deducts_free_allowance(self):
        result = self.server.calculate_service_cost("observability", "logging", 50)
        line = result["breakdown"][0]
        self.assertEqual(line["quantity"], 40)
        self.assertEqual(line["monthly_total"], 20.0)

    def test_calculate_hourly_service(self):
        result = self.server.calculate_service_cost("security", "Network Firewall - Instance", 1)
        self.assertEqual(result["total_monthly"], round(2.75 * 730, 2))

    def test_calculate_unknown_service(self):
        result = self.server.calculate_service_cost("security", "telepathy", 1)
        self.assertEqual(result["status"], "not_found")
        self.assertEqual(len(result["notes"]), 1)

    def test_compare_options_sorted(self):
        result = self.server.compare_service_options("cache", quantity=10)
        self.assertEqual(result["cheapest"], "OCI Cache - High Memory Tier")
        costs = [o["monthly_cost"] for o in result["options"]]
        self.assertEqual(costs, sorted(costs))

    def test_summary(self):
        summary = self.server.get_services_summary()
        self.assertEqual(summary["total_pricing_items"], sum(summary["categories"].values()))


class TestCoreServer(unittest.TestCase):

    def setUp(self):
        from oci_pricing_mcp.mcp_servers.core_server import CoreServer
        self.server = CoreServer(bundled_loader())

    def test_get_pricing_all(self):
        result = self.server.get_pricing("storage")
        self.assertEqual(result["total_count"], len(self.server.loader.get_storage_pricing()))

    def test_get_pricing_type_filter_uses_variant_fields(self):
        result = self.server.get_pricing("compute", type="VM.Standard.E5")
        self.assertTrue(result["items"])
        self.assertTrue(all("E5" in i["shape_family"] for i in result["items"]))

    def test_get_pricing_unknown_service(self):
        with self.assertRaises(ValueError):
            self.server.get_pricing("mainframe")

    def test_compare_regions_uniform(self):
        result = self.server.compare_regions("compute", "VM.Standard.E5.Flex")
        prices = {r["price_per_unit"] for r in result["result"]["regions"]}
        self.assertEqual(len(prices), 1)
        commercial = [r for r in self.server.loader.get_regions() if r.type == "commercial"]
        self.assertEqual(len(result["result"]["regions"]), len(commercial))
        self.assertEqual(result["result"]["price_difference_percent"], 0)

    def test_compare_regions_no_match(self):
        self.assertIsNone(self.server.compare_regions("compute", "nothing-like-this")["result"])

    def test_list_regions(self):
        result = self.server.list_regions()
        self.assertEqual(result["total_count"], 38)
        self.assertEqual(result["commercial_count"], 33)

    def test_list_services_category(self):
        result = self.server.list_services(category="storage")
        self.assertTrue(all(s["category"] == "storage" for s in result["services"]))
        self.assertIn("compute", result["categories"])

    def test_search_products(self):
        result = self.server.search_products(search="B97384")
        self.assertEqual(result["total_count"], 1)

    def test_pricing_info_and_health(self):
        info = self.server.get_pricing_info()
        self.assertIn("last_updated", info)
        self.assertEqual(info["counts"]["compute"], 13)
        health = self.server.get_server_health()
        self.assertEqual(health["servers"][0]["server"], "core")

    def test_refresh(self):
        self.assertTrue(self.server.refresh_pricing_data()["refreshed"])


if __name__ == "__main__":
    unittest.main(verbosity=2)
