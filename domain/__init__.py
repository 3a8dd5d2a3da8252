"""商品内容生成领域模型。"""
