"""
组织架构系统基本使用示例
"""
import sys
import os

# 添加src到路径
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from org_tree import OrgChartSystem


def main():
    """主函数"""
    print("=" * 60)
    print("组织架构系统 - 基本使用示例")
    print("=" * 60)

    # 1. 创建系统实例
    print("\n1. 初始化系统...")
    system = OrgChartSystem({"log_level": "WARNING"})
    root_id = system.store.root_id

    # 2. 构建组织结构
    print("\n2. 构建组织结构...")
    cto = system.create_member({
        "name": "Alice", "title": "CTO", "department": "Technology",
        "avatar": "👩‍💻", "parentId": root_id
    })["member"]
    cfo = system.create_member({
        "name": "Bob", "title": "CFO", "department": "Finance", "parentId": root_id
    })["member"]
    dev = system.create_member({
        "name": "Carol", "title": "Engineer", "department": "Technology", "parentId": cto["id"]
    })["member"]
    print(f"   成员总数: {system.get_tree()['stats']['total']}")

    # 3. 移动成员
    print("\n3. 移动成员...")
    result = system.move_member(dev["id"], {"newParentId": cfo["id"]})
    print(f"   {dev['name']} -> {cfo['name']}: {result['success']}")

    result = system.move_member(cto["id"], {"newParentId": cto["id"]})
    print(f"   非法移动: {result['error']} ({result['code']})")

    # 4. 布局
    print("\n4. 计算布局...")
    for node in system.get_layout()["nodes"]:
        print(f"   {node['id']}: x={node['x']}, y={node['y']}")

    print("\n" + "=" * 60)
    print("示例完成")
    print("=" * 60)


if __name__ == "__main__":
    main()
